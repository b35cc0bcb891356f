"""Exception hierarchy for the chat application."""


class ChatError(Exception):
    """Base class for all chat errors."""


class ConfigurationError(ChatError):
    """Raised when the assistant cannot be reached because of missing configuration."""


class StreamingError(ChatError):
    """Raised when the generation request fails before or during streaming."""


class ConversationError(ChatError):
    """Raised for invalid conversation store operations."""


class DuplicateMessageError(ConversationError):
    """Raised when appending a message whose id is already present."""


class MessageNotFoundError(ConversationError):
    """Raised when no message matches the requested id."""
