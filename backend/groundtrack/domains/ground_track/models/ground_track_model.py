import json
import uuid
from enum import Enum
from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import BaseModel, Field as PydanticField
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, Float, ForeignKey, Integer, Text, Uuid

from groundtrack.domains.common.models.base_model import utc_now
from groundtrack.domains.satellite.models.satellite_model import TrackPoint


class GroundTrack(SQLModel, table=True):
    """貼文的地面軌跡

    每篇貼文最多一筆（post_id 唯一），由 Worker 建立後不再更新，
    貼文刪除時連帶刪除。
    """

    __tablename__ = "post_ground_tracks"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
        description="主鍵 ID",
    )
    post_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
            index=True,
        ),
        description="所屬貼文 ID",
    )
    track_data: str = Field(
        sa_column=Column(Text, nullable=False),
        description="軌跡點 JSON 陣列 [{lat, lon, alt, time}]",
    )
    start_lat: float = Field(sa_column=Column(Float, index=True), description="起點緯度")
    start_lon: float = Field(sa_column=Column(Float, index=True), description="起點經度")
    end_lat: float = Field(sa_column=Column(Float), description="終點緯度")
    end_lon: float = Field(sa_column=Column(Float), description="終點經度")
    processed_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False),
        description="計算完成時間",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False),
        description="創建時間",
    )

    @classmethod
    def from_points(
        cls,
        post_id: uuid.UUID,
        points: List[TrackPoint],
        processed_at: Optional[datetime] = None,
    ) -> "GroundTrack":
        """由軌跡點建立紀錄，points 不可為空"""
        if not points:
            raise ValueError("a ground track needs at least one point")
        start, end = points[0], points[-1]
        return cls(
            post_id=post_id,
            track_data=json.dumps([p.to_dict() for p in points]),
            start_lat=start.latitude,
            start_lon=start.longitude,
            end_lat=end.latitude,
            end_lon=end.longitude,
            processed_at=processed_at or utc_now(),
        )

    def get_points(self) -> List[TrackPoint]:
        """從 JSON 字串還原軌跡點"""
        return [TrackPoint.model_validate(p) for p in json.loads(self.track_data)]


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    PROCESSING = "processing"
    UNAVAILABLE = "unavailable"


class PostAge(str, Enum):
    FRESH = "fresh"
    OLD = "old"


class GroundTrackData(BaseModel):
    """可用時回傳的軌跡內容"""

    post_id: str
    track_points: List[Dict[str, Any]]
    start_lat: float
    start_lon: float
    end_lat: float
    end_lon: float
    start: Dict[str, Any]
    end: Dict[str, Any]
    processed_at: datetime
    point_count: int

    @classmethod
    def from_record(cls, record: GroundTrack) -> "GroundTrackData":
        points = [p.to_dict() for p in record.get_points()]
        return cls(
            post_id=str(record.post_id),
            track_points=points,
            start_lat=record.start_lat,
            start_lon=record.start_lon,
            end_lat=record.end_lat,
            end_lon=record.end_lon,
            start=points[0],
            end=points[-1],
            processed_at=record.processed_at,
            point_count=len(points),
        )


class GroundTrackStatus(BaseModel):
    """地面軌跡可用性狀態，每次請求即時推導，不儲存"""

    status: AvailabilityStatus = PydanticField(..., description="available / processing / unavailable")
    message: str
    post_age: PostAge = PydanticField(..., description="fresh / old")
    has_telemetry: bool
    has_ground_track: bool
    created_at: datetime
    data: Optional[GroundTrackData] = None


class TickReport(BaseModel):
    """Worker 單次掃描的統計"""

    candidates: int = 0
    created: int = 0
    skipped: int = 0
    failed: int = 0
    conflicts: int = 0
