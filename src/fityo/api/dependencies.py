"""Request dependencies shared by the API routers."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Header, Request

from fityo.services.auth import parse_bearer_token

if TYPE_CHECKING:
    from fityo.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def current_user_id(
    request: Request, authorization: str | None = Header(default=None)
) -> UUID:
    """Resolve the bearer token to a user id or raise NotAuthenticated."""
    container = get_container(request)
    return container.auth_service.require_user(parse_bearer_token(authorization))
