"""
貼文與遙測資料表

貼文本身由其他系統建立，這裡只保留地面軌跡流程需要的欄位：
貼文可以直接帶一個遙測 blob，或在 post_telemetry 表中有一筆附件。
"""

import uuid
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, ForeignKey, Integer, LargeBinary, String, Uuid

from groundtrack.domains.common.models.base_model import utc_now


class Post(SQLModel, table=True):
    """貼文資料模型"""

    __tablename__ = "posts"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        sa_column=Column(Uuid, primary_key=True),
        description="貼文 ID",
    )
    station_id: str = Field(
        sa_column=Column(String, nullable=False, index=True),
        description="地面站 ID",
    )
    satellite_name: str = Field(
        sa_column=Column(String, nullable=False), description="衛星名稱"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False),
        description="觀測時間",
    )
    telemetry: Optional[bytes] = Field(
        default=None,
        sa_column=Column(LargeBinary, nullable=True),
        description="內嵌的遙測 blob（可選）",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False),
        description="創建時間",
    )
    updated_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime), description="更新時間"
    )

    def has_inline_telemetry(self) -> bool:
        return bool(self.telemetry)


class PostTelemetry(SQLModel, table=True):
    """貼文的遙測附件"""

    __tablename__ = "post_telemetry"

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
            index=True,
        ),
        description="所屬貼文 ID",
    )
    data: bytes = Field(
        sa_column=Column(LargeBinary, nullable=False), description="遙測 blob"
    )
    filename: str = Field(
        default="product.cbor",
        sa_column=Column(String, nullable=False),
        description="原始檔名",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False),
        description="創建時間",
    )
