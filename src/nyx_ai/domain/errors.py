"""Error types raised by the services and mapped to HTTP responses."""

from typing import Optional


class NyxError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidRequestError(NyxError):
    """Missing or malformed input."""

    status_code = 400


class ConversationNotFoundError(NyxError):
    status_code = 404

    def __init__(self, conversation_id: str):
        super().__init__("Conversation not found")
        self.conversation_id = conversation_id


class DuplicateEmailError(NyxError):
    status_code = 400

    def __init__(self, email: str):
        super().__init__("Email already registered")
        self.email = email


class UpstreamError(NyxError):
    """An external service (AI provider, remote website) failed."""

    status_code = 500


class AIProcessingError(UpstreamError):
    def __init__(self, details: str):
        super().__init__("AI processing failed", details=details)


class FetchError(UpstreamError):
    """A URL could not be turned into text."""
