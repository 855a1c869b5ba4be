import logging
import uuid
from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from groundtrack.db.base import async_session_maker
from groundtrack.domains.ground_track.interfaces.ground_track_repository import (
    GroundTrackRepositoryInterface,
)
from groundtrack.domains.ground_track.models.ground_track_model import GroundTrack
from groundtrack.domains.post.models.post_model import Post, PostTelemetry

logger = logging.getLogger(__name__)


class SQLModelGroundTrackRepository(GroundTrackRepositoryInterface):
    """地面軌跡儲存庫的 SQLModel 實現

    post_id 的唯一約束是唯一的並行控制：多個 Worker 同時計算同一篇貼文時，
    只有第一筆插入成功，其餘插入被拒絕且不視為錯誤。
    """

    def __init__(self, session_factory=async_session_maker):
        self._session_factory = session_factory

    async def find_candidate_post_ids(self) -> List[uuid.UUID]:
        """有遙測 blob（任一位置）但尚未有地面軌跡的貼文"""
        has_attachment = (
            select(PostTelemetry.id).where(PostTelemetry.post_id == Post.id).exists()
        )
        has_ground_track = (
            select(GroundTrack.id).where(GroundTrack.post_id == Post.id).exists()
        )
        statement = (
            select(Post.id)
            .where(~has_ground_track)
            .where(or_(func.length(Post.telemetry) > 0, has_attachment))
            .order_by(Post.created_at)
        )
        async with self._session_factory() as session:
            results = await session.execute(statement)
            return list(results.scalars().all())

    async def get_by_post_id(self, post_id: uuid.UUID) -> Optional[GroundTrack]:
        """獲取貼文的地面軌跡"""
        async with self._session_factory() as session:
            statement = select(GroundTrack).where(GroundTrack.post_id == post_id)
            results = await session.execute(statement)
            return results.scalar_one_or_none()

    async def insert(self, ground_track: GroundTrack) -> bool:
        """插入地面軌跡；違反唯一約束時回傳 False"""
        async with self._session_factory() as session:
            session.add(ground_track)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.info(
                    f"Ground track for post {ground_track.post_id} was not inserted (already exists or post removed): {e.orig}"
                )
                return False
            await session.refresh(ground_track)
            return True
