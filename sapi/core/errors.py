"""Error types raised by the request runner."""

__all__ = [
    "SapiError",
    "SpecError",
    "UnsupportedMethodError",
    "BodyEncodingError",
    "TransportError",
    "OutputWriteError",
]


class SapiError(Exception):
    """Base class for all runner errors."""


class SpecError(SapiError):
    """Input document could not be read or validated."""

    def __init__(self, document: str, cause: object) -> None:
        self.document = document
        self.cause = cause
        super().__init__(f"Error while parsing {document} file: {cause}")


class UnsupportedMethodError(SapiError):
    """Request uses an HTTP verb the runner does not send."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Not supported request type: {method!r}")


class BodyEncodingError(SapiError):
    """Request body could not be built from the declared data."""


class TransportError(SapiError):
    """Connection-level failure: DNS, refused connection, timeout, protocol."""

    def __init__(self, url: str, cause: BaseException) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Error while connecting to {url}: {cause!r}")


class OutputWriteError(SapiError):
    """Results or skeleton file could not be written."""

    def __init__(self, path: str, cause: object) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Error while writing to {path} file: {cause}")
