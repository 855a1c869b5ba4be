from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict


def utc_now() -> datetime:
    """目前 UTC 時間（naive），與資料庫中的 DateTime 欄位一致"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """將帶時區的時間轉為 naive UTC，naive 時間視為已是 UTC"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class DomainBaseModel(BaseModel):
    """所有領域模型的基類"""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        validate_assignment=True,
    )


class ValueObject(DomainBaseModel):
    """值對象基類，不可變且通過其屬性值來定義相等性"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)
