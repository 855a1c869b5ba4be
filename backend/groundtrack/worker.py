"""
地面軌跡 Worker 獨立行程

    python -m groundtrack.worker

與 API 只共用資料庫，兩者之間沒有其他通訊。
"""

import asyncio
import logging
import signal

from groundtrack.db.database import database
from groundtrack.domains.ground_track.services.ground_track_worker import (
    GroundTrackWorker,
)

logger = logging.getLogger(__name__)


async def run_worker():
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows 不支援 add_signal_handler，改由 KeyboardInterrupt 結束
            logger.debug(f"Signal handler for {sig.name} not supported on this platform")

    await database.connect()
    try:
        await GroundTrackWorker().run_forever(stop_event)
    finally:
        await database.disconnect()


def main():
    try:
        asyncio.run(run_worker())
    except KeyboardInterrupt:
        logger.info("Ground track worker interrupted")


if __name__ == "__main__":
    main()
