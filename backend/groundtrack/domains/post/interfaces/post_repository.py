import uuid
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from groundtrack.domains.post.models.post_model import Post


class PostRepositoryInterface(ABC):
    """貼文與遙測 blob 的唯讀儲存庫接口"""

    @abstractmethod
    async def get_post(self, post_id: uuid.UUID) -> Optional[Post]:
        """根據 ID 獲取貼文"""
        pass

    @abstractmethod
    async def get_telemetry_blob(
        self, post_id: uuid.UUID
    ) -> Optional[Tuple[bytes, str]]:
        """獲取貼文的遙測 blob 與其位置（inline 或 attachment）"""
        pass

    @abstractmethod
    async def has_telemetry(self, post_id: uuid.UUID) -> bool:
        """檢查貼文在任一位置是否有遙測 blob"""
        pass
