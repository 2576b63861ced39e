"""Login, self-registration and the request-level auth dependencies.

Clients send HTTP Basic credentials on every call; they are checked against
the store with :func:`lpg_connect.services.accounts.authenticate`.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from lpg_connect.errors import ConflictError, PermissionDeniedError, ValidationError
from lpg_connect.schemas import Credentials, ErrorResponse, Role, User, UserOut
from lpg_connect.services import accounts
from lpg_connect.stores.base import ApplicationStore
from lpg_connect.stores.factory import get_store

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])
basic = HTTPBasic()

INVALID_CREDENTIALS = "Invalid Username or Password."


def get_current_user(
    credentials: HTTPBasicCredentials = Depends(basic),
    store: ApplicationStore = Depends(get_store),
) -> User:
    """Dependency that resolves the Basic credentials to a user or 401s."""
    user = accounts.authenticate(store, credentials.username, credentials.password)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail=INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Basic"},
        )
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Dependency that only lets ADMIN users through."""
    try:
        return accounts.require_role(user, Role.ADMIN)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.post(
    "/login",
    response_model=UserOut,
    summary="Check a username and password",
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
def login(body: Credentials, store: ApplicationStore = Depends(get_store)) -> UserOut:
    """Return the account's role when the credentials match exactly."""
    user = accounts.authenticate(store, body.username, body.password)
    if user is None:
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)
    return UserOut(username=user.username, role=user.role)


@router.post(
    "/register",
    response_model=UserOut,
    status_code=201,
    summary="Create a USER account",
    responses={
        400: {"model": ErrorResponse, "description": "Blank username or password"},
        409: {"model": ErrorResponse, "description": "Username already taken"},
    },
)
def register(body: Credentials, store: ApplicationStore = Depends(get_store)) -> UserOut:
    try:
        user = accounts.register(store, body.username, body.password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return UserOut(username=user.username, role=user.role)
