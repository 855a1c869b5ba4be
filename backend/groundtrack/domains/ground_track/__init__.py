"""
地面軌跡領域模組

包含地面軌跡資料表、背景計算 Worker 與可用性狀態推導。
"""

from groundtrack.domains.ground_track.models.ground_track_model import (
    GroundTrack,
    GroundTrackData,
    GroundTrackStatus,
    AvailabilityStatus,
    PostAge,
    TickReport,
)
from groundtrack.domains.ground_track.interfaces.ground_track_repository import (
    GroundTrackRepositoryInterface,
)
from groundtrack.domains.ground_track.adapters.sqlmodel_ground_track_repository import (
    SQLModelGroundTrackRepository,
)
from groundtrack.domains.ground_track.services.ground_track_worker import (
    GroundTrackWorker,
    ProcessOutcome,
)
from groundtrack.domains.ground_track.services.availability_service import (
    AvailabilityService,
)
