"""
貼文領域模組

貼文本體由上傳端寫入，本服務只讀取。
"""

from groundtrack.domains.post.models.post_model import Post, PostTelemetry
from groundtrack.domains.post.interfaces.post_repository import (
    PostRepositoryInterface,
)
from groundtrack.domains.post.adapters.sqlmodel_post_repository import (
    SQLModelPostRepository,
)
