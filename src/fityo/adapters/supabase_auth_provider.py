"""Supabase Auth lookup of the current user."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from fityo.services.auth import AuthProvider

logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthProvider(AuthProvider):
    """Validates access tokens with Supabase Auth."""

    client: Client

    def get_user_id(self, access_token: str | None) -> UUID | None:
        """Return the user id behind a JWT, or None when it is not valid."""
        if not access_token:
            return None
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError as exc:
            logger.info("Rejected access token: %s", exc)
            return None
        if response is None or response.user is None:
            return None
        return UUID(str(response.user.id))
