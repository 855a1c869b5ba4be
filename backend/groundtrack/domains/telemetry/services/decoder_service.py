"""
SatDump CBOR 產品解碼與驗證

- decode(): 上傳時使用的嚴格驗證
- decode_json_view(): 「以 JSON 解碼」讀取路徑
- extract_track_inputs(): Worker 使用的寬鬆擷取，只關心 tle 與 timestamps
"""

import base64
import json
import logging
import math
import uuid
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict

import cbor2
from pydantic import ValidationError

from groundtrack.domains.telemetry.exceptions import (
    EmptyPayload,
    InvalidImageProduct,
    MalformedBinary,
    MissingRequiredField,
    UnsupportedProductType,
)
from groundtrack.domains.telemetry.models.product_model import (
    TelemetryProduct,
    TrackInputs,
)

logger = logging.getLogger(__name__)

# 掃描線沒有有效時間戳時使用的值
MISSING_TIMESTAMP = -1.0

REQUIRED_FIELDS = ("instrument", "type")
SUPPORTED_PRODUCT_TYPES = ("image",)


def _load(data: bytes) -> Any:
    if not data:
        raise EmptyPayload("telemetry payload is empty")
    try:
        return cbor2.loads(data)
    except cbor2.CBORDecodeError as e:
        raise MalformedBinary(f"failed to parse CBOR data: {e}") from e
    except (ValueError, TypeError, OverflowError) as e:
        # cbor2 在少數格式錯誤時會拋出一般例外
        raise MalformedBinary(f"failed to parse CBOR data: {e}") from e


def _load_root(data: bytes) -> Dict[str, Any]:
    raw = _load(data)
    if not isinstance(raw, Mapping):
        raise MalformedBinary(
            f"CBOR root must be a map, got {type(raw).__name__}"
        )
    return to_json_compatible(raw)


def _key_to_text(key: Any) -> str:
    """將任意 CBOR map key 轉成字串"""
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, (int, float)):
        return str(key)
    if isinstance(key, (bytes, bytearray)):
        try:
            return bytes(key).decode("utf-8")
        except UnicodeDecodeError:
            return bytes(key).hex()
    if isinstance(key, cbor2.CBORTag):
        return _key_to_text(key.value)
    # 複合 key（陣列、map）以其 JSON 文字表示
    return json.dumps(to_json_compatible(key), sort_keys=True, separators=(",", ":"))


def to_json_compatible(value: Any) -> Any:
    """遞迴地把解碼後的 CBOR 值轉成可 JSON 序列化的結構"""
    if isinstance(value, Mapping):
        return {_key_to_text(k): to_json_compatible(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_compatible(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return [to_json_compatible(item) for item in value]
    if isinstance(value, bool) or value is None or isinstance(value, (str, int)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, Fraction)):
        converted = float(value)
        return converted if math.isfinite(converted) else None
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, cbor2.CBORTag):
        return to_json_compatible(value.value)
    if isinstance(value, cbor2.CBORSimpleValue):
        return value.value
    if value is cbor2.undefined:
        return None
    return str(value)


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def decode(data: bytes) -> TelemetryProduct:
    """嚴格解碼並驗證 SatDump 產品

    Raises:
        EmptyPayload: blob 為空
        MalformedBinary: 不是合法的 CBOR，或欄位型別不符
        MissingRequiredField: 缺少 instrument 或 type
        UnsupportedProductType: type 不是 "image"
        InvalidImageProduct: image 產品沒有任何影像通道
    """
    root = _load_root(data)

    for field in REQUIRED_FIELDS:
        if _is_missing(root.get(field)):
            raise MissingRequiredField(field)

    try:
        product = TelemetryProduct.model_validate(root)
    except ValidationError as e:
        raise MalformedBinary(f"invalid field types in product: {e}") from e

    if product.product_type not in SUPPORTED_PRODUCT_TYPES:
        raise UnsupportedProductType(product.product_type)

    if product.product_type == "image" and not product.images:
        raise InvalidImageProduct(
            "invalid image product: image product must have at least one image channel"
        )

    return product


def decode_json_view(data: bytes) -> Dict[str, Any]:
    """將 blob 解碼為通用的 JSON 結構，不做欄位驗證"""
    return _load_root(data)


def _coerce_timestamp(value: Any) -> float:
    if isinstance(value, bool):
        return MISSING_TIMESTAMP
    if isinstance(value, (int, float)):
        try:
            as_float = float(value)
        except OverflowError:
            return MISSING_TIMESTAMP
        if math.isfinite(as_float):
            return as_float
    return MISSING_TIMESTAMP


def extract_track_inputs(data: bytes) -> TrackInputs:
    """寬鬆擷取 tle 與 timestamps

    不檢查 instrument/type/images；tle 或 timestamps 不存在時對應欄位為 None。
    非數字的時間戳視同 -1（該掃描線沒有有效時間）。
    """
    root = _load_root(data)
    inputs = TrackInputs()

    tle = root.get("tle")
    if isinstance(tle, dict):
        line1 = tle.get("line1")
        line2 = tle.get("line2")
        if isinstance(line1, str) and isinstance(line2, str):
            inputs.tle_line1 = line1
            inputs.tle_line2 = line2
        else:
            logger.debug("TLE block present but line1/line2 are not strings")

    timestamps = root.get("timestamps")
    if isinstance(timestamps, list) and timestamps:
        inputs.timestamps = [_coerce_timestamp(t) for t in timestamps]

    return inputs
