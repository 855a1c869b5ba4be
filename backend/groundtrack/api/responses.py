"""
統一的 API 回應格式

成功: {"success": true, "message": ..., "data": ...}
失敗: {"success": false, "error": ...}
"""

from typing import Any, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException


def success_response(message: str, data: Optional[Any] = None) -> dict:
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    return body


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """將 HTTPException 轉為錯誤信封"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )
