"""Authentication lookups against the configured auth provider."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fityo.domain.errors import NotAuthenticated


class AuthProvider(Protocol):
    """Resolves an access token to the current user."""

    def get_user_id(self, access_token: str | None) -> UUID | None:
        """Return the user id for a token, or None without a valid session."""


@dataclass
class AuthService:
    """Application service that gates every operation on a session."""

    provider: AuthProvider

    def current_user_id(self, access_token: str | None) -> UUID | None:
        """Return the current user id, if any."""
        return self.provider.get_user_id(access_token)

    def require_user(self, access_token: str | None) -> UUID:
        """Return the current user id or raise NotAuthenticated."""
        user_id = self.provider.get_user_id(access_token)
        if user_id is None:
            raise NotAuthenticated()
        return user_id


def parse_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header."""
    if authorization is None:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
