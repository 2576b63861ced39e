"""Identity and access: login, account creation and the role gate."""

import logging
from typing import List, Optional

from lpg_connect.errors import ConflictError, PermissionDeniedError
from lpg_connect.schemas import Role, User
from lpg_connect.services.validation import validate_non_empty
from lpg_connect.stores.base import ApplicationStore

logger = logging.getLogger(__name__)


def authenticate(store: ApplicationStore, username: str, password: str) -> Optional[User]:
    """Return the matching user, or ``None`` for any mismatch.

    Matching is exact and case-sensitive on both fields.
    """
    return store.authenticate(username, password)


def add_user(
    store: ApplicationStore, username: str, password: str, role: Role = Role.USER
) -> User:
    """Create an account with the given role.

    Raises:
        ValidationError: If the username or password is blank.
        ConflictError: If the username is already taken.
    """
    validate_non_empty(username, "Username")
    validate_non_empty(password, "Password")
    username = username.strip()
    user = User(username=username, password=password, role=role)
    try:
        store.register(user)
    except ConflictError:
        raise ConflictError(
            "Username already exists. Please choose a different username."
        ) from None
    logger.info("Created %s account %s", role.value, username)
    return user


def register(store: ApplicationStore, username: str, password: str) -> User:
    """Self-registration; always creates a ``USER`` account.

    Raises:
        ValidationError: If the username or password is blank.
        ConflictError: If the username is already taken.
    """
    try:
        return add_user(store, username, password, Role.USER)
    except ConflictError:
        raise ConflictError("Username already taken.") from None


def list_users(store: ApplicationStore) -> List[User]:
    return store.list_users()


def require_role(user: User, *roles: Role) -> User:
    """Return ``user`` if its role is one of ``roles``.

    Raises:
        PermissionDeniedError: Otherwise.
    """
    if user.role not in roles:
        raise PermissionDeniedError(
            f"This action requires the {' or '.join(r.value for r in roles)} role."
        )
    return user
