"""Assistant display name validation and persistence.

The name is the only state that survives a page reload. It is stored under a
single key in a mutable mapping, which in the running app is NiceGUI's
per-browser ``app.storage.user``.
"""

import logging
from collections.abc import MutableMapping
from typing import Annotated, Any

from pydantic import StringConstraints, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ASSISTANT_NAME = "Lumi"
MAX_NAME_LENGTH = 20
NAME_STORAGE_KEY = "assistant_name"

AssistantName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_NAME_LENGTH),
]

_name_adapter: TypeAdapter[str] = TypeAdapter(AssistantName)


def normalize_assistant_name(raw: Any) -> str:
    """Trim and validate an assistant name.

    Args:
        raw: Name as typed by the user.

    Returns:
        The trimmed name.

    Raises:
        pydantic.ValidationError: If the name is empty or longer than 20 characters.
            It is a ValueError subclass.
    """
    return _name_adapter.validate_python(raw)


class AssistantNameStore:
    """Loads and saves the assistant name in a key-value storage."""

    def __init__(
        self,
        storage: MutableMapping[str, Any],
        default: str = DEFAULT_ASSISTANT_NAME,
    ) -> None:
        self._storage = storage
        self._default = default

    def load(self) -> str:
        """Return the stored name, or the default if absent, empty or invalid."""
        raw = self._storage.get(NAME_STORAGE_KEY)
        if not raw:
            return self._default
        try:
            return normalize_assistant_name(raw)
        except ValidationError:
            logger.warning(f"Ignoring invalid stored assistant name: {raw!r}")
            return self._default

    def save(self, name: str) -> None:
        self._storage[NAME_STORAGE_KEY] = name
