"""Durable store backed by the ``users`` and ``applications`` tables.

Every public method opens its own session, runs a single statement (plus the
commit for writes) and closes the session again. There is no transaction
spanning two calls.
"""

import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from lpg_connect.database import Base, _build_engine
from lpg_connect.errors import ConflictError, StorageError
from lpg_connect.models import ApplicationRecord, UserRecord
from lpg_connect.schemas import Application, Role, Status, User
from lpg_connect.stores.base import DEFAULT_USERS, SAMPLE_APPLICATION, ApplicationStore

logger = logging.getLogger(__name__)

NEWEST_FIRST = (ApplicationRecord.created_at.desc(), ApplicationRecord.app_id.desc())


def _to_user(record: UserRecord) -> User:
    role = Role.ADMIN if record.role == Role.ADMIN.value else Role.USER
    return User(username=record.username, password=record.password, role=role)


def _to_application(record: ApplicationRecord) -> Application:
    return Application(
        app_id=record.app_id,
        applicant_username=record.applicant_username,
        name=record.name,
        mobile_no=record.mobile_no,
        address=record.address,
        num_connections=record.num_connections,
        status=Status(record.status),
        created_at=record.created_at,
    )


class SqlApplicationStore(ApplicationStore):
    """SQLAlchemy implementation of :class:`ApplicationStore`."""

    kind = "durable"

    def __init__(self, engine):
        self.engine = engine
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=engine
        )

    @classmethod
    def from_url(cls, database_url: str) -> "SqlApplicationStore":
        return cls(_build_engine(database_url))

    @contextmanager
    def _session(self, operation: str):
        """Yield a short-lived session, translating driver errors.

        Raises:
            StorageError: If the statement fails at the database.
        """
        session: Session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Database error during %s: %s", operation, e)
            raise StorageError(f"Database error during {operation}.") from e
        finally:
            session.close()

    def initialize(self, seed: bool = True) -> None:
        """Create missing tables and, optionally, the default data.

        Default users are inserted when absent; the sample application only
        when the applications table is empty.
        """
        Base.metadata.create_all(bind=self.engine)
        if not seed:
            return
        with self._session("seeding") as session:
            for user in DEFAULT_USERS:
                if session.get(UserRecord, user.username) is None:
                    session.add(
                        UserRecord(
                            username=user.username,
                            password=user.password,
                            role=user.role.value,
                        )
                    )
            session.commit()
            count = session.scalar(select(func.count(ApplicationRecord.app_id)))
            if count == 0:
                session.add(
                    ApplicationRecord(
                        applicant_username=SAMPLE_APPLICATION.applicant_username,
                        name=SAMPLE_APPLICATION.name,
                        mobile_no=SAMPLE_APPLICATION.mobile_no,
                        address=SAMPLE_APPLICATION.address,
                        num_connections=SAMPLE_APPLICATION.num_connections,
                        status=SAMPLE_APPLICATION.status.value,
                    )
                )
                session.commit()
                logger.info("Inserted sample application for %s",
                            SAMPLE_APPLICATION.applicant_username)

    def authenticate(self, username: str, password: str) -> Optional[User]:
        try:
            with self._session("user validation") as session:
                record = session.scalars(
                    select(UserRecord).where(
                        UserRecord.username == username,
                        UserRecord.password == password,
                    )
                ).first()
                # Collations may be case-insensitive; compare in Python too
                if (
                    record is None
                    or record.username != username
                    or record.password != password
                ):
                    return None
                return _to_user(record)
        except StorageError:
            return None

    def register(self, user: User) -> None:
        with self._session("user registration") as session:
            session.add(
                UserRecord(
                    username=user.username,
                    password=user.password,
                    role=user.role.value,
                )
            )
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise ConflictError(f"Username '{user.username}' is already taken.")

    def find_user(self, username: str) -> Optional[User]:
        with self._session("user lookup") as session:
            record = session.get(UserRecord, username)
            if record is None or record.username != username:
                return None
            return _to_user(record)

    def list_users(self) -> List[User]:
        with self._session("users retrieval") as session:
            records = session.scalars(
                select(UserRecord).order_by(UserRecord.username)
            ).all()
            return [_to_user(r) for r in records]

    def save_application(self, application: Application) -> int:
        with self._session("application save") as session:
            record = ApplicationRecord(
                applicant_username=application.applicant_username,
                name=application.name,
                mobile_no=application.mobile_no,
                address=application.address,
                num_connections=application.num_connections,
                status=application.status.value,
            )
            session.add(record)
            session.commit()
            return record.app_id

    def list_all_applications(self) -> List[Application]:
        with self._session("applications retrieval") as session:
            records = session.scalars(
                select(ApplicationRecord).order_by(*NEWEST_FIRST)
            ).all()
            return [_to_application(r) for r in records]

    def find_application_by_id(self, app_id: int) -> Optional[Application]:
        with self._session("application lookup") as session:
            record = session.get(ApplicationRecord, app_id)
            return _to_application(record) if record is not None else None

    def list_applications_by_user(self, username: str) -> List[Application]:
        with self._session("user applications retrieval") as session:
            records = session.scalars(
                select(ApplicationRecord)
                .where(ApplicationRecord.applicant_username == username)
                .order_by(*NEWEST_FIRST)
            ).all()
            return [_to_application(r) for r in records]

    def update_application(self, application: Application) -> None:
        with self._session("application update") as session:
            result = session.execute(
                update(ApplicationRecord)
                .where(ApplicationRecord.app_id == application.app_id)
                .values(
                    name=application.name,
                    mobile_no=application.mobile_no,
                    address=application.address,
                    num_connections=application.num_connections,
                    status=application.status.value,
                )
            )
            session.commit()
            if result.rowcount == 0:
                logger.debug("Ignoring update for unknown application %s",
                             application.app_id)

    def delete_application(self, app_id: int) -> None:
        with self._session("application deletion") as session:
            session.execute(
                delete(ApplicationRecord).where(ApplicationRecord.app_id == app_id)
            )
            session.commit()
