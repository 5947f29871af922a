class AppError(Exception):
    """Base class for all application errors."""

    status_code = 500
    code = "internal_error"
    # Message sent to the client instead of `detail`, when set.
    public_detail: str | None = None

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidRequestError(AppError):
    """Client sent a malformed or invalid request (400)."""

    status_code = 400
    code = "invalid_request"


class MissingURLError(InvalidRequestError):
    """Request body carried no url (400)."""

    code = "missing_url"


class InvalidURLError(InvalidRequestError):
    """The url could not be parsed as an http(s) URL (400)."""

    code = "invalid_url"


class FetchFailedError(InvalidRequestError):
    """The article could not be retrieved (400)."""

    code = "fetch_failed"


class ConfigurationError(AppError):
    """Server misconfiguration (500)."""

    status_code = 500
    code = "configuration_error"
    public_detail = "Failed to generate summary"


class SummaryFailedError(AppError):
    """Summary could not be produced (500)."""

    status_code = 500
    code = "summary_failed"


class NotReadyError(AppError):
    """Service is temporarily unavailable (503)."""

    status_code = 503
    code = "not_ready"
