import logging
from typing import Any, Dict
from fastapi import APIRouter, HTTPException, Path, status

from groundtrack.api.dependencies import parse_post_id
from groundtrack.api.responses import success_response
from groundtrack.domains.ground_track.exceptions import PostNotFound
from groundtrack.domains.ground_track.models.ground_track_model import (
    GroundTrackStatus,
)
from groundtrack.domains.ground_track.services.availability_service import (
    AvailabilityService,
)

logger = logging.getLogger(__name__)
router = APIRouter()

# 創建服務實例
availability_service = AvailabilityService()


async def _load_status(post_id: str) -> GroundTrackStatus:
    parsed_id = parse_post_id(post_id)
    try:
        return await availability_service.get_status(parsed_id)
    except PostNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Post not found"
        )
    except ValueError as e:
        # track_data 內容損毀
        logger.error(
            f"Failed to parse ground track data for post {post_id}: {e}", exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to parse ground track data",
        )


@router.get("/{post_id}/ground-track", response_model=Dict[str, Any])
async def get_post_ground_track(post_id: str = Path(..., description="貼文 ID")):
    """獲取貼文的地面軌跡狀態（available / processing / unavailable），可用時附帶軌跡"""
    ground_track_status = await _load_status(post_id)
    # data 只在 available 時出現
    return success_response(
        "Ground track status retrieved successfully",
        ground_track_status.model_dump(exclude_none=True),
    )


@router.get("/{post_id}/ground-track/status", response_model=Dict[str, Any])
async def get_post_ground_track_status(
    post_id: str = Path(..., description="貼文 ID"),
):
    """/{post_id}/ground-track 的別名"""
    return await get_post_ground_track(post_id)


@router.get(
    "/{post_id}/ground-track/track",
    response_model=Dict[str, Any],
    deprecated=True,
)
async def get_post_ground_track_data(post_id: str = Path(..., description="貼文 ID")):
    """舊版介面：只回傳軌跡，尚未計算時回傳 404

    與狀態介面共用同一個推導流程。
    """
    ground_track_status = await _load_status(post_id)
    if ground_track_status.data is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Ground track not found"
        )
    return success_response(
        "Ground track retrieved successfully", ground_track_status.data
    )
