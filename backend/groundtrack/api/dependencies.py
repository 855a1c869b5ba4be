import uuid
from fastapi import HTTPException, status


def parse_post_id(post_id: str) -> uuid.UUID:
    """解析路徑中的貼文 ID，格式錯誤時回傳 400"""
    try:
        return uuid.UUID(post_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid post ID"
        )
