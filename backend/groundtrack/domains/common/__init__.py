"""
共用領域模組

包含所有領域共用的基礎模型與時間工具。
"""

from groundtrack.domains.common.models.base_model import (
    DomainBaseModel,
    ValueObject,
    as_naive_utc,
    utc_now,
)
