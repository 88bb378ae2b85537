ERROR_CATEGORY = "API Error"


class AppError(Exception):
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UpstreamError(AppError):
    """The market-data provider answered with a status we report to the caller."""


class UpstreamUnavailableError(AppError):
    def __init__(self, message: str = "Failed to fetch data"):
        super().__init__(message, status_code=500)


class UpstreamReadError(AppError):
    def __init__(self, message: str = "Failed to read response"):
        super().__init__(message, status_code=500)


class UpstreamParseError(AppError):
    def __init__(self, message: str = "Failed to parse data"):
        super().__init__(message, status_code=500)
