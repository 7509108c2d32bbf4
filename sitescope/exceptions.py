NON_SERIALIZABLE_MESSAGE = "An unexpected and non-serializable issue occurred."


def safe_str(value: object) -> str | None:
    if value is None:
        return None
    try:
        return str(value)
    except Exception:
        return None


class InputError(Exception):
    """Raised when the caller's request input is unusable."""


class MissingParameterError(InputError):
    """Raised when a required query parameter is absent or empty."""


class InvalidDomainError(InputError):
    """Raised when the domain does not look like a hostname."""


class ConfigurationError(Exception):
    """Raised when the deployment is missing required settings (e.g. the API key)."""


class AnalysisError(Exception):
    """Raised when the analysis call fails after input and config checks pass.

    Each subclass carries exactly the diagnostic fields that apply to it.
    """

    code = "analysis_error"

    def __init__(self, message: str | None, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    @property
    def name(self) -> str:
        return type(self.cause).__name__ if self.cause is not None else type(self).__name__

    def _message_text(self) -> str:
        text = safe_str(self.message)
        return NON_SERIALIZABLE_MESSAGE if text is None else text

    def details(self) -> str:
        text = safe_str(self.message)
        if text is None:
            return NON_SERIALIZABLE_MESSAGE
        return f"An error occurred: {text}"

    def debug_info(self) -> dict:
        info = {
            "rawErrorType": self.code,
            "name": self.name,
            "message": self._message_text(),
        }
        cause = safe_str(self.cause)
        if cause:
            info["cause"] = cause
        return info


class SchemaValidationError(AnalysisError):
    """Raised when the model's output is not JSON or does not fit the schema."""

    code = "schema_validation"

    def __init__(self, message: str, raw_text: str, cause: BaseException | None = None):
        super().__init__(message, cause)
        self.raw_text = raw_text

    def debug_info(self) -> dict:
        info = super().debug_info()
        info["llmOutput"] = self.raw_text
        return info


class UpstreamError(AnalysisError):
    """Raised when the generation service can't be reached or answers with an error."""

    code = "upstream"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause)
        self.status_code = status_code
        self.body = body

    def debug_info(self) -> dict:
        info = super().debug_info()
        if self.status_code is not None:
            info["statusCode"] = self.status_code
        if self.body:
            info["body"] = self.body
        return info


class UnknownAnalysisError(AnalysisError):
    """Wraps any other exception raised along the analysis call path."""

    code = "unknown"

    def __init__(self, message: str | None, error: BaseException):
        super().__init__(message, cause=error.__cause__ or error.__context__)
        self.error = error

    @property
    def name(self) -> str:
        return type(self.error).__name__
