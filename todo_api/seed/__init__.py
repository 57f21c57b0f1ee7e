"""Idempotent creation of the built-in admin and viewer accounts.

Run standalone with `python -m todo_api.seed`, or set SEED_ON_STARTUP=true to
run it from the application lifespan.
"""
from __future__ import annotations

import logging

from todo_api.models.user import User
from todo_api.services.auth import hash_password
from todo_api.utils.base import Role
from todo_api.utils.config import Settings


logger = logging.getLogger(__name__)


def _fixtures(settings: Settings) -> list[tuple[str, str, str, Role]]:
    fixtures = []
    if settings.admin_username and settings.admin_password:
        email = settings.admin_email or f"{settings.admin_username}@localhost.localdomain"
        fixtures.append((settings.admin_username, email, settings.admin_password, Role.ADMIN))
    if settings.viewer_username and settings.viewer_password:
        email = settings.viewer_email or f"{settings.viewer_username}@localhost.localdomain"
        fixtures.append((settings.viewer_username, email, settings.viewer_password, Role.VIEWER))
    return fixtures


def ensure_users(settings: Settings) -> list[User]:
    """Create configured accounts that do not exist yet; existing ones are left alone."""
    users: list[User] = []
    for username, email, pwd, role in _fixtures(settings):
        user = User.objects(username=username).first()
        if not user:
            user = User(username=username, email=email, password=hash_password(pwd), role=role.value)
            user.save()
            logger.info("Seeded %s account %s", role.value, username)
        users.append(user)
    if not users:
        logger.warning("No seed accounts configured; set ADMIN_USERNAME/ADMIN_PASSWORD")
    return users
