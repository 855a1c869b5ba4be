"""
地面軌跡背景處理

排程的唯一依據是「有遙測 blob 且沒有地面軌跡」：沒有佇列、沒有狀態欄位、
沒有重試計數。處理失敗的貼文下一輪會被重新找到；永遠無法解碼或計算的貼文
會在每一輪被靜默重試，只留下日誌。
"""

import asyncio
import logging
import uuid
from enum import Enum
from typing import List, Optional

from groundtrack.core.config import (
    GROUND_TRACK_INTERVAL_SECONDS,
    GROUND_TRACK_POST_TIMEOUT_SECONDS,
    GROUND_TRACK_WORKER_CONCURRENCY,
)
from groundtrack.domains.ground_track.adapters.sqlmodel_ground_track_repository import (
    SQLModelGroundTrackRepository,
)
from groundtrack.domains.ground_track.interfaces.ground_track_repository import (
    GroundTrackRepositoryInterface,
)
from groundtrack.domains.ground_track.models.ground_track_model import (
    GroundTrack,
    TickReport,
)
from groundtrack.domains.post.adapters.sqlmodel_post_repository import (
    SQLModelPostRepository,
)
from groundtrack.domains.post.interfaces.post_repository import PostRepositoryInterface
from groundtrack.domains.satellite.exceptions import OrbitError
from groundtrack.domains.satellite.models.satellite_model import TrackPoint
from groundtrack.domains.satellite.services.orbit_service import OrbitService
from groundtrack.domains.telemetry.exceptions import TelemetryError
from groundtrack.domains.telemetry.services.decoder_service import (
    extract_track_inputs,
)

logger = logging.getLogger(__name__)


class ProcessOutcome(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"
    CONFLICT = "conflict"


class GroundTrackWorker:
    """定期掃描並計算地面軌跡"""

    def __init__(
        self,
        repository: Optional[GroundTrackRepositoryInterface] = None,
        post_repository: Optional[PostRepositoryInterface] = None,
        orbit_service: Optional[OrbitService] = None,
        interval_seconds: float = GROUND_TRACK_INTERVAL_SECONDS,
        post_timeout_seconds: float = GROUND_TRACK_POST_TIMEOUT_SECONDS,
        concurrency: int = GROUND_TRACK_WORKER_CONCURRENCY,
    ):
        self._repository = repository or SQLModelGroundTrackRepository()
        self._post_repository = post_repository or SQLModelPostRepository()
        self._orbit_service = orbit_service or OrbitService()
        self.interval_seconds = interval_seconds
        self.post_timeout_seconds = post_timeout_seconds
        self._semaphore = asyncio.Semaphore(max(1, concurrency))

    def compute_track(self, blob: bytes) -> Optional[List[TrackPoint]]:
        """解碼 + 軌道傳播（CPU 密集，於執行緒中執行）

        tle 或 timestamps 不存在時回傳 None。
        """
        inputs = extract_track_inputs(blob)
        if not inputs.has_tle() or not inputs.has_timestamps():
            return None
        return self._orbit_service.propagate(
            inputs.tle_line1, inputs.tle_line2, inputs.timestamps
        )

    async def process_post(self, post_id: uuid.UUID) -> ProcessOutcome:
        """處理單一貼文，任何失敗都只記錄日誌"""
        try:
            blob = await self._post_repository.get_telemetry_blob(post_id)
            if blob is None:
                logger.warning(f"Post {post_id}: telemetry blob disappeared, skipping")
                return ProcessOutcome.SKIPPED
            data, source = blob

            points = await asyncio.wait_for(
                asyncio.to_thread(self.compute_track, data),
                timeout=self.post_timeout_seconds,
            )
            if points is None:
                logger.info(
                    f"Post {post_id}: {source} telemetry has no TLE or timestamps, skipping"
                )
                return ProcessOutcome.SKIPPED

            record = GroundTrack.from_points(post_id, points)
            if not await self._repository.insert(record):
                return ProcessOutcome.CONFLICT

            logger.info(
                f"Post {post_id}: ground track created with {len(points)} points"
            )
            return ProcessOutcome.CREATED
        except (TelemetryError, OrbitError) as e:
            logger.warning(f"Post {post_id}: ground track failed [{e.code}] {e}")
            return ProcessOutcome.FAILED
        except asyncio.TimeoutError:
            logger.warning(
                f"Post {post_id}: ground track computation exceeded {self.post_timeout_seconds}s, leaving for next tick"
            )
            return ProcessOutcome.FAILED
        except Exception as e:
            logger.error(
                f"Post {post_id}: unexpected error while processing ground track: {e}",
                exc_info=True,
            )
            return ProcessOutcome.FAILED

    async def _process_bounded(self, post_id: uuid.UUID) -> ProcessOutcome:
        async with self._semaphore:
            return await self.process_post(post_id)

    async def run_tick(self) -> TickReport:
        """掃描一次所有候選貼文"""
        report = TickReport()
        try:
            candidates = await self._repository.find_candidate_post_ids()
        except Exception as e:
            logger.error(f"Failed to fetch posts without ground tracks: {e}", exc_info=True)
            return report

        report.candidates = len(candidates)
        if not candidates:
            logger.debug("No posts need ground track processing")
            return report

        logger.info(f"Processing {len(candidates)} posts for ground track calculation")
        outcomes = await asyncio.gather(
            *(self._process_bounded(post_id) for post_id in candidates)
        )
        for outcome in outcomes:
            if outcome is ProcessOutcome.CREATED:
                report.created += 1
            elif outcome is ProcessOutcome.SKIPPED:
                report.skipped += 1
            elif outcome is ProcessOutcome.CONFLICT:
                report.conflicts += 1
            else:
                report.failed += 1

        logger.info(
            f"Ground track tick finished: created={report.created} skipped={report.skipped} "
            f"failed={report.failed} conflicts={report.conflicts}"
        )
        return report

    async def run_forever(self, stop_event: Optional[asyncio.Event] = None):
        """啟動時先掃描一次，之後每隔 interval_seconds 掃描"""
        stop_event = stop_event or asyncio.Event()
        logger.info(
            f"Starting ground track worker (interval {self.interval_seconds}s)"
        )
        while not stop_event.is_set():
            await self.run_tick()
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                continue
        logger.info("Ground track worker stopped")
