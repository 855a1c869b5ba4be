import logging
import uuid
from typing import Optional, Tuple
from sqlalchemy import func
from sqlmodel import select

from groundtrack.db.base import async_session_maker
from groundtrack.domains.post.interfaces.post_repository import PostRepositoryInterface
from groundtrack.domains.post.models.post_model import Post, PostTelemetry

logger = logging.getLogger(__name__)

TELEMETRY_INLINE = "inline"
TELEMETRY_ATTACHMENT = "attachment"


class SQLModelPostRepository(PostRepositoryInterface):
    """貼文儲存庫的 SQLModel 實現

    遙測 blob 可能在 posts.telemetry 欄位，也可能在 post_telemetry 表中。
    """

    def __init__(self, session_factory=async_session_maker):
        self._session_factory = session_factory

    async def get_post(self, post_id: uuid.UUID) -> Optional[Post]:
        """根據 ID 獲取貼文"""
        async with self._session_factory() as session:
            statement = select(Post).where(Post.id == post_id)
            results = await session.execute(statement)
            return results.scalar_one_or_none()

    async def get_telemetry_blob(
        self, post_id: uuid.UUID
    ) -> Optional[Tuple[bytes, str]]:
        """先看貼文本身的 blob，再看 post_telemetry 附件"""
        async with self._session_factory() as session:
            post_result = await session.execute(
                select(Post.telemetry).where(Post.id == post_id)
            )
            inline = post_result.scalar_one_or_none()
            if inline:
                return bytes(inline), TELEMETRY_INLINE

            attachment_result = await session.execute(
                select(PostTelemetry.data)
                .where(PostTelemetry.post_id == post_id)
                .order_by(PostTelemetry.created_at, PostTelemetry.id)
                .limit(1)
            )
            attachment = attachment_result.scalar_one_or_none()
            if attachment:
                return bytes(attachment), TELEMETRY_ATTACHMENT
            logger.debug(f"No telemetry blob found for post {post_id}")
            return None

    async def has_telemetry(self, post_id: uuid.UUID) -> bool:
        """檢查貼文在任一位置是否有遙測 blob"""
        async with self._session_factory() as session:
            inline_result = await session.execute(
                select(func.length(Post.telemetry)).where(Post.id == post_id)
            )
            if inline_result.scalar_one_or_none():
                return True

            count_result = await session.execute(
                select(func.count(PostTelemetry.id)).where(
                    PostTelemetry.post_id == post_id
                )
            )
            return (count_result.scalar_one_or_none() or 0) > 0
