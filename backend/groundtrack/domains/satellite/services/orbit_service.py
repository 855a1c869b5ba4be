import logging
from typing import List, Sequence, Tuple

import numpy as np
from sgp4.api import SGP4_ERRORS, WGS84, Satrec
from sgp4.propagation import gstime

from groundtrack.domains.satellite.exceptions import (
    InvalidTLE,
    NoValidTimestamps,
    PropagationFailed,
)
from groundtrack.domains.satellite.models.satellite_model import TrackPoint
from groundtrack.domains.satellite.services.tle_service import validate_tle

logger = logging.getLogger(__name__)

# Unix epoch (1970-01-01T00:00:00Z) 的儒略日
UNIX_EPOCH_JD = 2440587.5
SECONDS_PER_DAY = 86400.0

# WGS84 橢球
WGS84_A_KM = 6378.137
WGS84_B_KM = 6356.7523142
WGS84_F = (WGS84_A_KM - WGS84_B_KM) / WGS84_A_KM
WGS84_E2 = 2 * WGS84_F - WGS84_F**2

GEODETIC_ITERATIONS = 20


def filter_timestamps(timestamps: Sequence[float]) -> List[float]:
    """移除 -1（以及任何負值）時間戳，保留原本順序"""
    return [float(t) for t in timestamps if t >= 0]


def unix_to_julian(timestamps: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Unix 秒轉為 SGP4 使用的 (整數部分儒略日, 日內分數)"""
    days = timestamps / SECONDS_PER_DAY
    whole_days = np.floor(days)
    return UNIX_EPOCH_JD + whole_days, days - whole_days


def teme_to_geodetic(
    positions_km: np.ndarray, gmst: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """地心慣性座標轉 WGS84 大地座標

    Returns:
        (緯度度數, 經度度數, 高度公里)；經度為 atan2(y, x) - GMST，不做正規化
    """
    x = positions_km[:, 0]
    y = positions_km[:, 1]
    z = positions_km[:, 2]

    r = np.hypot(x, y)
    longitude = np.arctan2(y, x) - gmst
    latitude = np.arctan2(z, r)

    for _ in range(GEODETIC_ITERATIONS):
        c = 1.0 / np.sqrt(1.0 - WGS84_E2 * np.sin(latitude) ** 2)
        latitude = np.arctan2(z + WGS84_A_KM * c * WGS84_E2 * np.sin(latitude), r)

    c = 1.0 / np.sqrt(1.0 - WGS84_E2 * np.sin(latitude) ** 2)
    altitude = r / np.cos(latitude) - WGS84_A_KM * c

    return np.degrees(latitude), np.degrees(longitude), altitude


class OrbitService:
    """地面軌跡傳播服務

    SGP4（WGS84 重力常數）計算每個有效時間戳的位置，再換算為大地座標。
    整個呼叫要嘛全部成功，要嘛拋出例外，不會回傳部分結果。
    """

    def _create_satrec(self, tle_line1: str, tle_line2: str) -> Satrec:
        tle = validate_tle(tle_line1, tle_line2)
        try:
            satrec = Satrec.twoline2rv(tle.line1, tle.line2, WGS84)
        except (ValueError, IndexError) as e:
            raise InvalidTLE(f"SGP4 could not parse TLE: {e}") from e
        if satrec.error != 0:
            raise InvalidTLE(
                f"SGP4 initialisation failed: {SGP4_ERRORS.get(satrec.error, satrec.error)}"
            )
        return satrec

    def propagate(
        self, tle_line1: str, tle_line2: str, timestamps: Sequence[float]
    ) -> List[TrackPoint]:
        """計算地面軌跡

        輸出第 i 個點對應第 i 個非 -1 的輸入時間戳。

        Raises:
            InvalidTLE: TLE 格式錯誤
            NoValidTimestamps: 過濾後沒有任何時間戳
            PropagationFailed: SGP4 在某個時間點回報錯誤
        """
        satrec = self._create_satrec(tle_line1, tle_line2)

        valid = filter_timestamps(timestamps)
        if not valid:
            raise NoValidTimestamps(
                f"no valid timestamps among {len(timestamps)} entries"
            )

        times = np.asarray(valid, dtype=float)
        jd, fr = unix_to_julian(times)
        errors, positions, _ = satrec.sgp4_array(jd, fr)

        failed = np.nonzero(errors)[0]
        if failed.size:
            index = int(failed[0])
            code = int(errors[index])
            raise PropagationFailed(
                f"SGP4 error {code} ({SGP4_ERRORS.get(code, 'unknown')}) at t={valid[index]}"
            )

        gmst = np.array([gstime(day + fraction) for day, fraction in zip(jd, fr)])
        latitudes, longitudes, altitudes = teme_to_geodetic(
            np.asarray(positions, dtype=float), gmst
        )

        logger.debug(
            f"Propagated {len(valid)} points ({len(timestamps) - len(valid)} sentinel timestamps skipped)"
        )
        return [
            TrackPoint(
                latitude=float(lat),
                longitude=float(lon),
                altitude=float(alt),
                time=t,
            )
            for lat, lon, alt, t in zip(latitudes, longitudes, altitudes, valid)
        ]


def propagate(
    tle_line1: str, tle_line2: str, timestamps: Sequence[float]
) -> List[TrackPoint]:
    """OrbitService().propagate 的便捷函數"""
    return OrbitService().propagate(tle_line1, tle_line2, timestamps)
