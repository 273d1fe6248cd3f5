"""
Analysis error taxonomy.

Every failure of one analysis attempt is an AnalysisError carrying a
human-readable message. None of them are retried.
"""


class AnalysisError(Exception):
    """Base class for terminal failures of a single analysis attempt."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(AnalysisError):
    """No API credential configured. Raised before any request is made."""


class RequestError(AnalysisError):
    """Transport failure or non-2xx response from the model endpoint."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(AnalysisError):
    """Successful HTTP exchange without a usable text payload."""


class MalformedResponseError(AnalysisError):
    """The payload text is not valid JSON."""


class SchemaValidationError(AnalysisError):
    """Parsed JSON does not have the IdeaAnalysis shape."""

    def __init__(self, message: str, violations: list):
        super().__init__(message)
        self.violations = violations


class FormValidationError(Exception):
    """Form input failed field validation. Recoverable by the user."""

    def __init__(self, result):
        super().__init__("Validation Error")
        self.result = result
