"""軌道計算錯誤"""


class OrbitError(ValueError):
    """TLE 或時間序列無法產生地面軌跡"""

    code = "OrbitError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTLE(OrbitError):
    code = "InvalidTLE"


class NoValidTimestamps(OrbitError):
    code = "NoValidTimestamps"


class PropagationFailed(OrbitError):
    code = "PropagationFailed"
