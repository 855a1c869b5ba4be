"""
Domain Layer

包含應用程序的核心領域模型和業務邏輯，按功能領域分為多個子模塊：

- post: 貼文與遙測附件的資料表
- telemetry: CBOR 遙測產品解碼
- satellite: TLE 驗證與 SGP4 軌道傳播
- ground_track: 地面軌跡計算 Worker 與可用性查詢
"""
