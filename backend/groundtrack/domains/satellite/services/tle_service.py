"""
TLE 格式檢查

依照 NORAD 兩行根數的固定欄位格式檢查：行長、行號、衛星編號、
各數值欄位與第 69 欄的 modulo-10 校驗碼。
"""

import logging
from typing import Tuple

from groundtrack.domains.satellite.exceptions import InvalidTLE
from groundtrack.domains.satellite.models.satellite_model import TLEData

logger = logging.getLogger(__name__)

TLE_LINE_LENGTH = 69

# (名稱, 起始 index, 結束 index) - 0-based, 結束不含
LINE1_NUMERIC_FIELDS: Tuple[Tuple[str, int, int], ...] = (
    ("epoch year", 18, 20),
    ("epoch day", 20, 32),
    ("mean motion derivative", 33, 43),
)
LINE2_NUMERIC_FIELDS: Tuple[Tuple[str, int, int], ...] = (
    ("inclination", 8, 16),
    ("right ascension of ascending node", 17, 25),
    ("argument of perigee", 34, 42),
    ("mean anomaly", 43, 51),
    ("mean motion", 52, 63),
)


def compute_checksum(line: str) -> int:
    """計算 TLE 行前 68 個字元的 modulo-10 校驗碼（'-' 計為 1）"""
    total = 0
    for ch in line[:68]:
        if ch.isdigit():
            total += int(ch)
        elif ch == "-":
            total += 1
    return total % 10


def _check_line(line: str, line_number: int) -> str:
    if not isinstance(line, str):
        raise InvalidTLE(f"TLE line {line_number} is not a string")

    cleaned = line.rstrip()
    if len(cleaned) != TLE_LINE_LENGTH:
        raise InvalidTLE(
            f"TLE line {line_number} must be {TLE_LINE_LENGTH} characters, got {len(cleaned)}"
        )
    if cleaned[0] != str(line_number) or cleaned[1] != " ":
        raise InvalidTLE(
            f"TLE line {line_number} must start with '{line_number} ', got '{cleaned[:2]}'"
        )

    checksum_char = cleaned[68]
    if not checksum_char.isdigit():
        raise InvalidTLE(f"TLE line {line_number} has a non-numeric checksum")
    expected = int(checksum_char)
    computed = compute_checksum(cleaned)
    if computed != expected:
        raise InvalidTLE(
            f"TLE line {line_number} checksum mismatch: expected {expected}, computed {computed}"
        )
    return cleaned


def _check_float_field(line: str, line_number: int, name: str, start: int, end: int):
    raw = line[start:end].strip()
    try:
        float(raw)
    except ValueError:
        raise InvalidTLE(f"TLE line {line_number} has an invalid {name}: '{raw}'")


def validate_tle(line1: str, line2: str) -> TLEData:
    """檢查兩行根數的語法，回傳去除尾端空白後的 TLEData

    Raises:
        InvalidTLE: 任何欄位不符合固定欄位格式
    """
    l1 = _check_line(line1, 1)
    l2 = _check_line(line2, 2)

    norad_1 = l1[2:7].strip()
    norad_2 = l2[2:7].strip()
    if not norad_1 or not norad_1.isalnum():
        raise InvalidTLE(f"TLE line 1 has an invalid catalog number: '{norad_1}'")
    if norad_1 != norad_2:
        raise InvalidTLE(f"NORAD ID mismatch: {norad_1} vs {norad_2}")

    if not l1[18:20].strip().isdigit():
        raise InvalidTLE(f"TLE line 1 has an invalid epoch year: '{l1[18:20]}'")
    for name, start, end in LINE1_NUMERIC_FIELDS:
        _check_float_field(l1, 1, name, start, end)
    for name, start, end in LINE2_NUMERIC_FIELDS:
        _check_float_field(l2, 2, name, start, end)

    # 離心率為隱含小數點的 7 位數字
    eccentricity = l2[26:33]
    if not eccentricity.strip().isdigit():
        raise InvalidTLE(f"TLE line 2 has an invalid eccentricity: '{eccentricity}'")

    return TLEData(line1=l1, line2=l2)
