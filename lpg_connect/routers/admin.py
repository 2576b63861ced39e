"""Administrator endpoints: review, status changes, deletion and users.

Every route requires an ADMIN account.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from lpg_connect.errors import ConflictError, NotFoundError, ValidationError
from lpg_connect.routers.auth import require_admin
from lpg_connect.schemas import (
    Application,
    ApplicationList,
    ApplicationStatistics,
    ErrorResponse,
    NewUserRequest,
    StatusUpdate,
    User,
    UserOut,
)
from lpg_connect.services import accounts, lifecycle, reporting
from lpg_connect.stores.base import ApplicationStore
from lpg_connect.stores.factory import get_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/admin",
    tags=["Admin"],
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not an administrator"},
    },
)


@router.get(
    "/applications",
    response_model=ApplicationList,
    summary="List all connection requests",
    responses={400: {"model": ErrorResponse, "description": "Unknown status"}},
)
def list_applications(
    status: Optional[str] = Query(
        None, description="Only return requests in this status"
    ),
    admin: User = Depends(require_admin),
    store: ApplicationStore = Depends(get_store),
) -> ApplicationList:
    try:
        data = lifecycle.list_all(store, status)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ApplicationList(total=len(data), data=data)


@router.get(
    "/applications/{app_id}",
    response_model=Application,
    summary="Show one connection request",
    responses={404: {"model": ErrorResponse, "description": "Unknown application"}},
)
def application_details(
    app_id: int,
    admin: User = Depends(require_admin),
    store: ApplicationStore = Depends(get_store),
) -> Application:
    try:
        return lifecycle.get_application(store, app_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put(
    "/applications/{app_id}/status",
    response_model=Application,
    summary="Change the status of a connection request",
    description="Any status may be set from any status.",
    responses={
        400: {"model": ErrorResponse, "description": "Unknown status"},
        404: {"model": ErrorResponse, "description": "Unknown application"},
    },
)
def update_status(
    app_id: int,
    body: StatusUpdate,
    admin: User = Depends(require_admin),
    store: ApplicationStore = Depends(get_store),
) -> Application:
    try:
        updated = lifecycle.set_status(store, app_id, body.status)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    logger.info("Admin %s set application %s to %s",
                admin.username, app_id, updated.status.value)
    return updated


@router.delete(
    "/applications/{app_id}",
    status_code=204,
    summary="Delete a connection request",
    description="Irreversible. Deleting an unknown id is not an error.",
)
def delete_application(
    app_id: int,
    admin: User = Depends(require_admin),
    store: ApplicationStore = Depends(get_store),
) -> Response:
    lifecycle.delete(store, app_id)
    return Response(status_code=204)


@router.get("/users", response_model=List[UserOut], summary="List all accounts")
def list_users(
    admin: User = Depends(require_admin),
    store: ApplicationStore = Depends(get_store),
) -> List[UserOut]:
    return [
        UserOut(username=u.username, role=u.role)
        for u in accounts.list_users(store)
    ]


@router.post(
    "/users",
    response_model=UserOut,
    status_code=201,
    summary="Create an account with a chosen role",
    responses={
        400: {"model": ErrorResponse, "description": "Blank username or password"},
        409: {"model": ErrorResponse, "description": "Username already exists"},
    },
)
def create_user(
    body: NewUserRequest,
    admin: User = Depends(require_admin),
    store: ApplicationStore = Depends(get_store),
) -> UserOut:
    try:
        user = accounts.add_user(store, body.username, body.password, body.role)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return UserOut(username=user.username, role=user.role)


@router.get(
    "/statistics",
    response_model=ApplicationStatistics,
    summary="Dashboard figures",
)
def statistics(
    admin: User = Depends(require_admin),
    store: ApplicationStore = Depends(get_store),
) -> ApplicationStatistics:
    return reporting.summarize(store)
