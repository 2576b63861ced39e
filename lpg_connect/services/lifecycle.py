"""Creation and status changes of LPG connection requests.

The one rule with teeth is the one-active-application rule: an applicant
holding a PENDING or APPROVED request may not submit another. Status changes
are unrestricted; an administrator may move a request between any two
states, including back to the state it is already in.

The active-application check and the insert are separate store calls, so two
submissions racing from the same user could both pass the check.
"""

import logging
from typing import List, Optional, Union

from lpg_connect.errors import ApplicationBlockedError, NotFoundError, ValidationError
from lpg_connect.schemas import ACTIVE_STATUSES, Application, Status
from lpg_connect.services.validation import (
    validate_mobile,
    validate_non_empty,
    validate_positive_integer,
)
from lpg_connect.stores.base import ApplicationStore

logger = logging.getLogger(__name__)

BLOCKED_MESSAGE = (
    "You currently have a PENDING or APPROVED application. "
    "You cannot submit a new request until it is settled."
)


def _parse_status(value: Union[Status, str]) -> Status:
    if isinstance(value, Status):
        return value
    try:
        return Status(value)
    except ValueError:
        allowed = ", ".join(s.value for s in Status)
        raise ValidationError(f"Status must be one of {allowed}.") from None


def has_active_application(store: ApplicationStore, username: str) -> bool:
    return any(
        app.status in ACTIVE_STATUSES
        for app in store.list_applications_by_user(username)
    )


def create_application(
    store: ApplicationStore,
    username: str,
    name: str,
    mobile: str,
    address: str,
    num_connections: str,
) -> int:
    """Submit a new PENDING connection request for ``username``.

    Args:
        store: Backend to persist to.
        username: The applicant.
        name: Applicant's full name (raw form input).
        mobile: Mobile number (raw form input).
        address: Installation address (raw form input).
        num_connections: Requested connections (raw form input).

    Returns:
        The id assigned to the new application.

    Raises:
        ValidationError: If any field is malformed.
        NotFoundError: If ``username`` is not a registered user.
        ApplicationBlockedError: If the applicant already has an active
            application.
    """
    validate_non_empty(name, "Name")
    validate_mobile(mobile)
    validate_non_empty(address, "Address")
    validate_positive_integer(num_connections)

    if store.find_user(username) is None:
        raise NotFoundError(f"User '{username}' not found.")

    if has_active_application(store, username):
        raise ApplicationBlockedError(BLOCKED_MESSAGE)

    app_id = store.save_application(
        Application(
            applicant_username=username,
            name=name.strip(),
            mobile_no=mobile,
            address=address.strip(),
            num_connections=int(num_connections),
            status=Status.PENDING,
        )
    )
    logger.info("Application %s submitted by %s", app_id, username)
    return app_id


def list_by_user(store: ApplicationStore, username: str) -> List[Application]:
    """All of the applicant's requests, whatever their status."""
    return store.list_applications_by_user(username)


def list_all(
    store: ApplicationStore, status: Optional[Union[Status, str]] = None
) -> List[Application]:
    """Every request in the system, optionally only those in ``status``."""
    applications = store.list_all_applications()
    if status is None:
        return applications
    wanted = _parse_status(status)
    return [app for app in applications if app.status == wanted]


def get_application(store: ApplicationStore, app_id: int) -> Application:
    """Raises NotFoundError for an unknown id."""
    application = store.find_application_by_id(app_id)
    if application is None:
        raise NotFoundError(f"Application {app_id} not found.")
    return application


def set_status(
    store: ApplicationStore, app_id: int, new_status: Union[Status, str]
) -> Application:
    """Overwrite the status of an application; any transition is allowed.

    Raises:
        ValidationError: If ``new_status`` is not a known status name.
        NotFoundError: If no application has ``app_id``.
    """
    status = _parse_status(new_status)
    application = get_application(store, app_id)
    updated = application.model_copy(update={"status": status})
    store.update_application(updated)
    logger.info(
        "Application %s status changed from %s to %s",
        app_id,
        application.status.value,
        status.value,
    )
    return updated


def delete(store: ApplicationStore, app_id: int) -> None:
    """Remove an application for good; unknown ids are ignored."""
    store.delete_application(app_id)
    logger.info("Application %s deleted", app_id)
