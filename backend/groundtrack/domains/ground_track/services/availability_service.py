import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional

from groundtrack.core.config import GROUND_TRACK_FRESH_MINUTES
from groundtrack.domains.common.models.base_model import as_naive_utc, utc_now
from groundtrack.domains.ground_track.adapters.sqlmodel_ground_track_repository import (
    SQLModelGroundTrackRepository,
)
from groundtrack.domains.ground_track.exceptions import PostNotFound
from groundtrack.domains.ground_track.interfaces.ground_track_repository import (
    GroundTrackRepositoryInterface,
)
from groundtrack.domains.ground_track.models.ground_track_model import (
    AvailabilityStatus,
    GroundTrackData,
    GroundTrackStatus,
    PostAge,
)
from groundtrack.domains.post.adapters.sqlmodel_post_repository import (
    SQLModelPostRepository,
)
from groundtrack.domains.post.interfaces.post_repository import PostRepositoryInterface

logger = logging.getLogger(__name__)

MESSAGES = {
    (AvailabilityStatus.AVAILABLE, PostAge.FRESH): "Ground track data is available",
    (AvailabilityStatus.AVAILABLE, PostAge.OLD): "Ground track data is available",
    (
        AvailabilityStatus.PROCESSING,
        PostAge.FRESH,
    ): "Post is fresh and ground track processing will begin shortly",
    (
        AvailabilityStatus.PROCESSING,
        PostAge.OLD,
    ): "Ground track is still processing. Please check back later",
    (
        AvailabilityStatus.UNAVAILABLE,
        PostAge.FRESH,
    ): "Post is fresh and telemetry data is still being uploaded",
    (
        AvailabilityStatus.UNAVAILABLE,
        PostAge.OLD,
    ): "Ground track data is not available for this post",
}


def derive_status(has_ground_track: bool, has_telemetry: bool) -> AvailabilityStatus:
    if has_ground_track:
        return AvailabilityStatus.AVAILABLE
    if has_telemetry:
        return AvailabilityStatus.PROCESSING
    return AvailabilityStatus.UNAVAILABLE


def classify_age(
    created_at: datetime, now: datetime, fresh_window: timedelta
) -> PostAge:
    if as_naive_utc(now) - as_naive_utc(created_at) < fresh_window:
        return PostAge.FRESH
    return PostAge.OLD


class AvailabilityService:
    """地面軌跡可用性

    狀態每次請求依現有資料推導，不寫入任何紀錄。
    """

    def __init__(
        self,
        repository: Optional[GroundTrackRepositoryInterface] = None,
        post_repository: Optional[PostRepositoryInterface] = None,
        fresh_minutes: float = GROUND_TRACK_FRESH_MINUTES,
    ):
        self._repository = repository or SQLModelGroundTrackRepository()
        self._post_repository = post_repository or SQLModelPostRepository()
        self.fresh_window = timedelta(minutes=fresh_minutes)

    async def get_status(
        self, post_id: uuid.UUID, now: Optional[datetime] = None
    ) -> GroundTrackStatus:
        """推導貼文的地面軌跡狀態

        Raises:
            PostNotFound: 貼文不存在
        """
        post = await self._post_repository.get_post(post_id)
        if post is None:
            raise PostNotFound(post_id)

        ground_track = await self._repository.get_by_post_id(post_id)
        has_telemetry = await self._post_repository.has_telemetry(post_id)

        status = derive_status(ground_track is not None, has_telemetry)
        post_age = classify_age(post.created_at, now or utc_now(), self.fresh_window)

        return GroundTrackStatus(
            status=status,
            message=MESSAGES[(status, post_age)],
            post_age=post_age,
            has_telemetry=has_telemetry,
            has_ground_track=ground_track is not None,
            created_at=post.created_at,
            data=GroundTrackData.from_record(ground_track) if ground_track else None,
        )
