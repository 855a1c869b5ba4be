import logging
from typing import Any, Dict
from fastapi import APIRouter, HTTPException, Path, status

from groundtrack.api.dependencies import parse_post_id
from groundtrack.api.responses import success_response
from groundtrack.domains.post.adapters.sqlmodel_post_repository import (
    SQLModelPostRepository,
)
from groundtrack.domains.telemetry.exceptions import TelemetryError
from groundtrack.domains.telemetry.models.product_model import TelemetryView
from groundtrack.domains.telemetry.services.decoder_service import (
    decode,
    decode_json_view,
)

logger = logging.getLogger(__name__)
router = APIRouter()

post_repository = SQLModelPostRepository()


@router.get("/{post_id}/telemetry", response_model=Dict[str, Any])
async def get_post_telemetry(post_id: str = Path(..., description="貼文 ID")):
    """將貼文的遙測 blob 解碼為 JSON，並附上嚴格驗證結果"""
    parsed_id = parse_post_id(post_id)

    post = await post_repository.get_post(parsed_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

    blob = await post_repository.get_telemetry_blob(parsed_id)
    if blob is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Telemetry data not found"
        )
    data, source = blob

    try:
        product = decode_json_view(data)
    except TelemetryError as e:
        logger.warning(f"Post {post_id}: telemetry cannot be decoded [{e.code}] {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Failed to decode telemetry data: {e}",
        )

    view = TelemetryView(
        post_id=str(parsed_id),
        source=source,
        size_bytes=len(data),
        valid=True,
        product=product,
    )
    try:
        decode(data)
    except TelemetryError as e:
        view.valid = False
        view.validation_code = e.code
        view.validation_error = str(e)

    return success_response("Telemetry decoded successfully", view)
