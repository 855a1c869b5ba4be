from typing import Dict, Any
from pydantic import BaseModel, Field as PydanticField

from groundtrack.domains.common.models.base_model import ValueObject


class TLEData(BaseModel):
    """TLE (Two-Line Element) 資料模型"""

    line1: str = PydanticField(..., description="TLE 第一行")
    line2: str = PydanticField(..., description="TLE 第二行")

    @property
    def norad_id(self) -> str:
        """從 TLE 數據中提取 NORAD ID"""
        return self.line1[2:7].strip()

    @property
    def international_designator(self) -> str:
        return self.line1[9:17].strip()


class TrackPoint(ValueObject):
    """地面軌跡點

    經度保持計算結果，不做 [-180, 180] 正規化。
    序列化時使用 lat/lon/alt/time 欄位名。
    """

    latitude: float = PydanticField(..., alias="lat", description="緯度（度）")
    longitude: float = PydanticField(..., alias="lon", description="經度（度，未正規化）")
    altitude: float = PydanticField(..., alias="alt", description="高度（公里）")
    time: float = PydanticField(..., description="Unix 時間戳（秒）")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
