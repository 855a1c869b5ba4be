from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class TelemetryProduct(BaseModel):
    """SatDump 遙測產品

    只宣告流程用得到的欄位，其餘欄位原樣保留（extra="allow"），
    重新輸出為 JSON 時不會遺失。
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    instrument: str = Field(..., description="儀器名稱")
    product_type: str = Field(..., alias="type", description="產品類型")
    tle: Optional[Dict[str, Any]] = Field(None, description="TLE 區塊")
    images: Optional[List[Any]] = Field(None, description="影像通道描述")
    timestamps: Optional[List[Any]] = Field(None, description="每條掃描線的時間戳")

    def to_json_view(self) -> Dict[str, Any]:
        """以原始欄位名稱輸出，包含未知欄位"""
        return self.model_dump(by_alias=True, exclude_unset=True)


class TrackInputs(BaseModel):
    """地面軌跡計算需要的最少資料（寬鬆擷取結果）"""

    tle_line1: Optional[str] = None
    tle_line2: Optional[str] = None
    timestamps: Optional[List[float]] = None

    def has_tle(self) -> bool:
        return bool(self.tle_line1) and bool(self.tle_line2)

    def has_timestamps(self) -> bool:
        return bool(self.timestamps)


class TelemetryView(BaseModel):
    """「以 JSON 解碼」讀取路徑的回應內容"""

    post_id: str
    source: str = Field(..., description="blob 所在位置：inline 或 attachment")
    size_bytes: int
    valid: bool = Field(..., description="是否通過上傳時的嚴格驗證")
    validation_error: Optional[str] = None
    validation_code: Optional[str] = None
    product: Any = Field(None, description="正規化後的產品內容")
