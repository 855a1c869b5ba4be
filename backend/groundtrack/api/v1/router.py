# backend/groundtrack/api/v1/router.py
from fastapi import APIRouter

from groundtrack.domains.ground_track.api.ground_track_api import (
    router as ground_track_router,
)
from groundtrack.domains.telemetry.api.telemetry_api import router as telemetry_router

api_router = APIRouter()

# 地面軌跡狀態與舊版軌跡介面
api_router.include_router(ground_track_router, prefix="/posts", tags=["Ground Track"])
# 遙測 blob 以 JSON 讀取
api_router.include_router(telemetry_router, prefix="/posts", tags=["Telemetry"])
