"""
遙測領域模組

解碼衛星接收產品（CBOR），提供嚴格驗證與寬鬆的軌跡輸入擷取。
"""

from groundtrack.domains.telemetry.models.product_model import (
    TelemetryProduct,
    TrackInputs,
    TelemetryView,
)
from groundtrack.domains.telemetry.exceptions import TelemetryError
from groundtrack.domains.telemetry.services.decoder_service import (
    decode,
    decode_json_view,
    extract_track_inputs,
)
