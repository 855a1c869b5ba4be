import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from groundtrack.domains.ground_track.models.ground_track_model import GroundTrack


class GroundTrackRepositoryInterface(ABC):
    """地面軌跡儲存庫接口

    沒有更新方法：軌跡建立後不可變。
    """

    @abstractmethod
    async def find_candidate_post_ids(self) -> List[uuid.UUID]:
        """有遙測 blob 但尚未有地面軌跡的貼文"""
        pass

    @abstractmethod
    async def get_by_post_id(self, post_id: uuid.UUID) -> Optional[GroundTrack]:
        """獲取貼文的地面軌跡"""
        pass

    @abstractmethod
    async def insert(self, ground_track: GroundTrack) -> bool:
        """插入地面軌跡；post_id 已存在時回傳 False"""
        pass
