import secrets
import uuid
from typing import Protocol

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


class IIDGenerator(Protocol):
    """
    Protocol for job ID generation strategies.
    Ids must be unique within one scheduler.
    """

    def next_id(self) -> str:
        """Generates the next unique identifier."""
        ...


class ShortIdGenerator(IIDGenerator):
    """
    Default generator: short random alphanumeric ids (62**length space).
    """

    def __init__(self, length: int = 12) -> None:
        self._length = length

    def next_id(self) -> str:
        return "".join(secrets.choice(_ALPHABET) for _ in range(self._length))


class UUID4Generator(IIDGenerator):
    """
    Fallback ID generator using UUIDv4.
    """

    def next_id(self) -> str:
        """Returns a string representation of a random UUIDv4."""
        return str(uuid.uuid4())
