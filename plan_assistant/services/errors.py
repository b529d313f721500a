"""Errors surfaced to the user as notices. None of them are fatal."""


class PlanAssistantError(RuntimeError):
    """Base error for recoverable plan assistant failures."""


class ApiKeyValidationError(PlanAssistantError):
    """Raised when the Gemini credential is missing or malformed."""


class TransportError(PlanAssistantError):
    """Raised when the Gemini service cannot be reached or rejects a request."""
