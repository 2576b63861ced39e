"""Storage contract shared by the durable and volatile backends."""

from abc import ABC, abstractmethod
from typing import List, Optional

from lpg_connect.schemas import Application, Role, User

DEFAULT_USERS = (
    User(username="admin", password="admin123", role=Role.ADMIN),
    User(username="user1", password="user123", role=Role.USER),
)

SAMPLE_APPLICATION = Application(
    applicant_username="user1",
    name="Priya Sharma",
    mobile_no="9876543210",
    address="123, Main St.",
    num_connections=2,
)


class ApplicationStore(ABC):
    """Persistence for users and connection requests.

    Call sites depend only on this interface; which backend is active is
    decided once, at startup, by :func:`lpg_connect.stores.factory.create_store`.
    Implementations trust their callers: role checks happen before a store
    method is reached.
    """

    #: Short backend name used in operator-facing logs.
    kind = "abstract"

    @abstractmethod
    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user whose username and password both match exactly.

        Never raises; backend failures are logged and yield ``None``.
        """

    @abstractmethod
    def register(self, user: User) -> None:
        """Insert ``user``.

        Raises:
            ConflictError: If the username is already taken.
        """

    @abstractmethod
    def find_user(self, username: str) -> Optional[User]:
        """Look up a user by exact username."""

    @abstractmethod
    def list_users(self) -> List[User]:
        """Return every user."""

    @abstractmethod
    def save_application(self, application: Application) -> int:
        """Persist a new application and return the id assigned to it.

        Any ``app_id`` on the argument is ignored.
        """

    @abstractmethod
    def list_all_applications(self) -> List[Application]:
        """Return every application."""

    @abstractmethod
    def find_application_by_id(self, app_id: int) -> Optional[Application]:
        """Return the application with ``app_id``, if any."""

    @abstractmethod
    def list_applications_by_user(self, username: str) -> List[Application]:
        """Return all applications submitted by ``username``."""

    @abstractmethod
    def update_application(self, application: Application) -> None:
        """Replace the stored record with the same ``app_id``.

        Unknown ids are ignored.
        """

    @abstractmethod
    def delete_application(self, app_id: int) -> None:
        """Remove the application permanently; unknown ids are ignored."""
