"""
衛星領域模組

包含 TLE 驗證與軌道傳播，將觀測時間點轉換為星下點。
"""

from groundtrack.domains.satellite.models.satellite_model import (
    TLEData,
    TrackPoint,
)
from groundtrack.domains.satellite.exceptions import (
    OrbitError,
    InvalidTLE,
    NoValidTimestamps,
    PropagationFailed,
)
from groundtrack.domains.satellite.services.orbit_service import OrbitService
from groundtrack.domains.satellite.services.tle_service import validate_tle
