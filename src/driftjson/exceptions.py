class DriftJSONError(Exception):
    """Base class for errors reported by the HTTP transport."""


class InvalidURLError(DriftJSONError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL: {url}")
        self.url = url


class NetworkError(DriftJSONError):
    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Network error: {cause}")
        self.cause = cause


class HTTPStatusError(DriftJSONError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP error: {status_code}")
        self.status_code = status_code


class EmptyResponseError(DriftJSONError):
    def __init__(self) -> None:
        super().__init__("Empty response body.")


class ParsingError(DriftJSONError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Parsing error: {detail}")
        self.detail = detail


class UnsupportedMethodError(DriftJSONError):
    def __init__(self, method: str) -> None:
        super().__init__(f"Unsupported HTTP method: {method}")
        self.method = method
