class ServiceError(Exception):
    pass


class RateLimitedError(ServiceError):
    pass


class DetectionResponseError(ServiceError):
    def __init__(self, reason: str, raw_response: str | None = None):
        super().__init__(f"Invalid detection response: {reason}")
        self.reason = reason
        self.raw_response = raw_response


class NetworkTimeoutError(ServiceError):
    def __init__(self, service: str, timeout_seconds: float):
        super().__init__(f"Network timeout after {timeout_seconds}s: {service}")
        self.service = service
        self.timeout_seconds = timeout_seconds
