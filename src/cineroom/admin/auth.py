"""Back-office login against the configured admin credentials."""

import logging
import secrets

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from cineroom.config import settings

logger = logging.getLogger(__name__)

SESSION_KEY = "cineroom_admin"


def credentials_match(username: str | None, password: str | None) -> bool:
    if not username or not password:
        return False
    return secrets.compare_digest(username, settings.admin_username) and secrets.compare_digest(
        password, settings.admin_password
    )


class AdminAuth(AuthenticationBackend):
    """Single shared admin account; the session only remembers the user name."""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = form.get("username")
        if not credentials_match(username, form.get("password")):
            logger.warning(f"Rejected admin login for {username!r}")
            return False

        request.session.update({SESSION_KEY: username})
        logger.info(f"Admin {username!r} logged in")
        return True

    async def logout(self, request: Request) -> bool:
        request.session.pop(SESSION_KEY, None)
        return True

    async def authenticate(self, request: Request) -> bool:
        return request.session.get(SESSION_KEY) == settings.admin_username
