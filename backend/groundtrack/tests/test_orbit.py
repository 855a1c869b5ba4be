"""
Test suite for TLE validation and ground track propagation
"""

import pytest

from conftest import ISS_EPOCH, ISS_LINE1, ISS_LINE2
from groundtrack.domains.satellite.exceptions import (
    InvalidTLE,
    NoValidTimestamps,
    OrbitError,
)
from groundtrack.domains.satellite.services.orbit_service import (
    OrbitService,
    filter_timestamps,
    propagate,
)
from groundtrack.domains.satellite.services.tle_service import (
    compute_checksum,
    validate_tle,
)


def _with_checksum(line: str, digit: int) -> str:
    return line[:68] + str(digit)


def test_checksum_of_known_lines():
    assert compute_checksum(ISS_LINE1) == 7
    assert compute_checksum(ISS_LINE2) == 7


def test_validate_tle_accepts_trailing_whitespace():
    tle = validate_tle(ISS_LINE1 + "  ", ISS_LINE2 + "\r")
    assert tle.line1 == ISS_LINE1
    assert tle.norad_id == "25544"
    assert tle.international_designator == "98067A"


def test_validate_tle_rejects_bad_checksum():
    with pytest.raises(InvalidTLE, match="checksum"):
        validate_tle(_with_checksum(ISS_LINE1, 3), ISS_LINE2)


@pytest.mark.parametrize(
    "line1, line2",
    [
        (ISS_LINE1[:60], ISS_LINE2),
        (ISS_LINE2, ISS_LINE1),
        ("", ""),
    ],
)
def test_validate_tle_rejects_malformed_lines(line1, line2):
    with pytest.raises(InvalidTLE):
        validate_tle(line1, line2)


def test_validate_tle_rejects_mismatched_catalog_numbers():
    other = ISS_LINE2[:2] + "25545" + ISS_LINE2[7:68]
    other = other + str(compute_checksum(other))

    with pytest.raises(InvalidTLE, match="mismatch"):
        validate_tle(ISS_LINE1, other)


def test_validate_tle_rejects_bad_numeric_field():
    # 傾角欄位換成字母，重新計算校驗碼
    broken = ISS_LINE2[:8] + " 51.64XX" + ISS_LINE2[16:68]
    broken = broken + str(compute_checksum(broken))

    with pytest.raises(InvalidTLE, match="inclination"):
        validate_tle(ISS_LINE1, broken)


def test_filter_timestamps_drops_sentinels_in_order():
    assert filter_timestamps([3.0, -1, 1.0, -1, 2.0]) == [3.0, 1.0, 2.0]


def test_propagate_skips_sentinels_and_keeps_order():
    t0, t2 = ISS_EPOCH, ISS_EPOCH + 120.0

    points = propagate(ISS_LINE1, ISS_LINE2, [t0, -1, t2])

    assert [p.time for p in points] == [t0, t2]
    # 與單獨計算每個時間點的結果一致
    alone = propagate(ISS_LINE1, ISS_LINE2, [t2])
    assert points[1].latitude == pytest.approx(alone[0].latitude)
    assert points[1].longitude == pytest.approx(alone[0].longitude)
    assert points[1].altitude == pytest.approx(alone[0].altitude)


def test_propagate_point_count_matches_valid_timestamps():
    timestamps = [ISS_EPOCH + i * 10.0 for i in range(30)]
    timestamps[5] = -1
    timestamps[17] = -1

    points = OrbitService().propagate(ISS_LINE1, ISS_LINE2, timestamps)

    assert len(points) == 28


def test_propagate_positions_are_plausible_for_the_iss():
    timestamps = [ISS_EPOCH + i * 60.0 for i in range(93)]

    points = propagate(ISS_LINE1, ISS_LINE2, timestamps)

    for point in points:
        # 51.6 度傾角，大地緯度略大於地心緯度
        assert abs(point.latitude) <= 52.5
        assert 300.0 < point.altitude < 450.0


def test_propagate_longitude_is_not_normalized():
    # 一整圈軌道中 atan2 覆蓋整個圓周，減去約 186 度的 GMST 後必定低於 -180
    timestamps = [ISS_EPOCH + i * 60.0 for i in range(93)]

    points = propagate(ISS_LINE1, ISS_LINE2, timestamps)

    longitudes = [p.longitude for p in points]
    assert min(longitudes) < -180.0
    assert all(-540.0 < lon <= 180.0 for lon in longitudes)


def test_propagate_all_sentinels():
    with pytest.raises(NoValidTimestamps):
        propagate(ISS_LINE1, ISS_LINE2, [-1, -1, -1])


def test_propagate_invalid_tle_is_an_orbit_error():
    with pytest.raises(OrbitError) as exc_info:
        propagate(_with_checksum(ISS_LINE1, 0), ISS_LINE2, [ISS_EPOCH])
    assert exc_info.value.code == "InvalidTLE"


def test_track_point_serializes_with_short_names():
    point = propagate(ISS_LINE1, ISS_LINE2, [ISS_EPOCH])[0]

    data = point.to_dict()

    assert set(data) == {"lat", "lon", "alt", "time"}
    assert data["time"] == ISS_EPOCH
