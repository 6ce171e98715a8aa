"""Identity of the caller, as supplied by the authentication provider."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Resolved caller: user id plus legacy primitive role."""

    user_id: str
    role: str | None = None
    email: str | None = None
