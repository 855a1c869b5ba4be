"""遙測產品解碼錯誤"""


class TelemetryError(ValueError):
    """遙測 blob 無法解碼或驗證失敗"""

    code = "TelemetryError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyPayload(TelemetryError):
    code = "EmptyPayload"


class MalformedBinary(TelemetryError):
    code = "MalformedBinary"


class MissingRequiredField(TelemetryError):
    code = "MissingRequiredField"

    def __init__(self, field: str):
        super().__init__(f"missing required field: {field}")
        self.field = field


class UnsupportedProductType(TelemetryError):
    code = "UnsupportedProductType"

    def __init__(self, product_type: str):
        super().__init__(f"unsupported product type: {product_type}")
        self.product_type = product_type


class InvalidImageProduct(TelemetryError):
    code = "InvalidImageProduct"
