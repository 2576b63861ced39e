"""Volatile, process-local store used when no database is reachable."""

import itertools
import logging
from typing import List, Optional

from lpg_connect.errors import ConflictError
from lpg_connect.schemas import Application, User
from lpg_connect.stores.base import DEFAULT_USERS, SAMPLE_APPLICATION, ApplicationStore

logger = logging.getLogger(__name__)


class InMemoryApplicationStore(ApplicationStore):
    """Keeps users and applications in insertion-ordered lists.

    Ids come from a per-instance counter; records carry no creation time and
    listings are never sorted. Everything is lost when the process exits.
    Not safe for concurrent use.
    """

    kind = "volatile"

    def __init__(self, id_start: int = 1001, seed: bool = True):
        self._users: List[User] = []
        self._applications: List[Application] = []
        self._ids = itertools.count(id_start)
        if seed:
            self._seed()

    def _seed(self) -> None:
        for user in DEFAULT_USERS:
            self.register(user)
        self.save_application(SAMPLE_APPLICATION)
        logger.info("Seeded in-memory store with default users and sample application")

    def authenticate(self, username: str, password: str) -> Optional[User]:
        for user in self._users:
            if user.username == username and user.password == password:
                return user.model_copy()
        return None

    def register(self, user: User) -> None:
        if any(u.username == user.username for u in self._users):
            raise ConflictError(f"Username '{user.username}' is already taken.")
        self._users.append(user.model_copy())

    def find_user(self, username: str) -> Optional[User]:
        for user in self._users:
            if user.username == username:
                return user.model_copy()
        return None

    def list_users(self) -> List[User]:
        return [u.model_copy() for u in self._users]

    def save_application(self, application: Application) -> int:
        app_id = next(self._ids)
        self._applications.append(
            application.model_copy(update={"app_id": app_id, "created_at": None})
        )
        return app_id

    def list_all_applications(self) -> List[Application]:
        return [a.model_copy() for a in self._applications]

    def find_application_by_id(self, app_id: int) -> Optional[Application]:
        for application in self._applications:
            if application.app_id == app_id:
                return application.model_copy()
        return None

    def list_applications_by_user(self, username: str) -> List[Application]:
        return [
            a.model_copy()
            for a in self._applications
            if a.applicant_username == username
        ]

    def update_application(self, application: Application) -> None:
        for idx, existing in enumerate(self._applications):
            if existing.app_id == application.app_id:
                # applicant and creation time are not replaceable
                self._applications[idx] = application.model_copy(
                    update={
                        "applicant_username": existing.applicant_username,
                        "created_at": existing.created_at,
                    }
                )
                return
        logger.debug("Ignoring update for unknown application %s", application.app_id)

    def delete_application(self, app_id: int) -> None:
        self._applications = [a for a in self._applications if a.app_id != app_id]
