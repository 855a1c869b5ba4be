"""
共用測試設定

資料庫 URL 必須在匯入 groundtrack 之前設定，engine 於匯入時建立。
"""

import os
import tempfile
import uuid
from datetime import timedelta

_DB_DIR = tempfile.mkdtemp(prefix="groundtrack-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import cbor2
import pytest
import pytest_asyncio
from sqlmodel import SQLModel

from groundtrack.db.base import async_session_maker, engine
from groundtrack.db.database import database  # noqa: F401  註冊所有表格
from groundtrack.domains.common.models.base_model import utc_now
from groundtrack.domains.post.models.post_model import Post, PostTelemetry

# ISS (ZARYA)，兩行校驗碼皆為 7
ISS_LINE1 = "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927"
ISS_LINE2 = "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537"
# 2008-09-20T12:25:40Z，TLE 的曆元
ISS_EPOCH = 1221913540.0


def make_product(**overrides) -> dict:
    product = {
        "instrument": "avhrr_3",
        "type": "image",
        "images": [{"abs_index": 0, "file": "AVHRR-1.png", "name": "1"}],
        "tle": {"name": "ISS (ZARYA)", "line1": ISS_LINE1, "line2": ISS_LINE2},
        "timestamps": [ISS_EPOCH, -1, ISS_EPOCH + 60.0],
    }
    product.update(overrides)
    return product


def encode_product(**overrides) -> bytes:
    return cbor2.dumps(make_product(**overrides))


@pytest.fixture
def iss_tle():
    return ISS_LINE1, ISS_LINE2


@pytest_asyncio.fixture
async def db():
    """每個測試重新建立表格，結束時釋放連線"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield async_session_maker
    await engine.dispose()


@pytest_asyncio.fixture
async def create_post(db):
    """建立貼文，可選擇內嵌 blob、附件 blob 與建立時間的偏移"""

    async def _create(telemetry=None, attachment=None, age=timedelta(0)):
        created_at = utc_now() - age
        post = Post(
            id=uuid.uuid4(),
            station_id="station-1",
            satellite_name="ISS (ZARYA)",
            timestamp=created_at,
            telemetry=telemetry,
            created_at=created_at,
        )
        async with db() as session:
            session.add(post)
            await session.commit()
            if attachment is not None:
                session.add(PostTelemetry(post_id=post.id, data=attachment))
                await session.commit()
        return post

    return _create
