from typing import Protocol


class UserLike(Protocol):
    """Protocol for user objects returned by authentication."""

    id: str | None
