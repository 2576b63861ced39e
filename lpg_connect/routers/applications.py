"""Endpoints for users submitting and tracking their own requests."""

from fastapi import APIRouter, Depends, HTTPException

from lpg_connect.errors import ApplicationBlockedError, NotFoundError, ValidationError
from lpg_connect.routers.auth import get_current_user
from lpg_connect.schemas import (
    Application,
    ApplicationCreate,
    ApplicationList,
    ErrorResponse,
    User,
)
from lpg_connect.services import lifecycle
from lpg_connect.stores.base import ApplicationStore
from lpg_connect.stores.factory import get_store

router = APIRouter(prefix="/api/v1/applications", tags=["Applications"])


@router.post(
    "",
    response_model=Application,
    status_code=201,
    summary="Submit a new connection request",
    description=(
        "Creates a PENDING request for the authenticated user. Refused while "
        "the user already has a PENDING or APPROVED request."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid form input"},
        409: {"model": ErrorResponse, "description": "Application blocked"},
    },
)
def submit_application(
    body: ApplicationCreate,
    user: User = Depends(get_current_user),
    store: ApplicationStore = Depends(get_store),
) -> Application:
    try:
        app_id = lifecycle.create_application(
            store,
            user.username,
            body.name,
            body.mobile_no,
            body.address,
            str(body.num_connections),
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ApplicationBlockedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return lifecycle.get_application(store, app_id)


@router.get(
    "/mine",
    response_model=ApplicationList,
    summary="List the caller's requests",
)
def my_applications(
    user: User = Depends(get_current_user),
    store: ApplicationStore = Depends(get_store),
) -> ApplicationList:
    """All of the caller's requests, newest first where the store records time."""
    data = lifecycle.list_by_user(store, user.username)
    return ApplicationList(total=len(data), data=data)
