"""Custom exceptions for feishu2md."""


class Feishu2mdError(Exception):
    """Base exception for feishu2md operations."""


class InvalidURLError(Feishu2mdError, ValueError):
    """Input is not a recognized Feishu/Lark document URL."""


class FetchError(Feishu2mdError):
    """Error during content fetching."""


class AuthError(FetchError):
    """Tenant access token could not be obtained."""


class ApiError(FetchError):
    """Open API answered with a non-zero code or an unexpected payload."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class DocumentNotFoundError(FetchError):
    """Document or wiki node does not exist or is not shared with the app."""


class RateLimitError(FetchError):
    """Rate limited by the Open API."""


class UnsupportedDocumentError(Feishu2mdError):
    """Wiki node points at something other than a docx document."""


class RenderError(Feishu2mdError):
    """Error while rendering a block tree."""


class MissingBlockError(RenderError):
    """A referenced block id is absent from the fetched block set."""


class ChapterCycleError(Feishu2mdError):
    """Chapter links loop back to a document that is already being converted."""
