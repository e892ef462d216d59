class IntelligenceError(Exception):
    """Base class for failures raised by the intelligence pipeline."""


class ProviderError(IntelligenceError):
    """The upstream AI backend failed (network, auth or malformed response)."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class ValidationError(IntelligenceError):
    """A required request field is missing or blank."""

    def __init__(self, field: str):
        super().__init__(f"'{field}' is required")
        self.field = field
