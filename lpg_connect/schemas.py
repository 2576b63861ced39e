"""Pydantic schemas for domain records, API requests and responses."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Access role of a user."""

    ADMIN = "ADMIN"
    USER = "USER"


class Status(str, Enum):
    """Lifecycle status of a connection request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


ACTIVE_STATUSES = frozenset({Status.PENDING, Status.APPROVED})


class User(BaseModel):
    """A registered account."""

    username: str = Field(..., description="Unique login name")
    password: str = Field(..., description="Password as stored")
    role: Role = Field(Role.USER, description="Access role")


class Application(BaseModel):
    """An LPG connection request."""

    app_id: Optional[int] = Field(None, description="System-assigned identifier")
    applicant_username: str = Field(..., description="User who submitted the request")
    name: str = Field(..., description="Applicant's full name")
    mobile_no: str = Field(..., description="Ten digit mobile number")
    address: str = Field(..., description="Installation address")
    num_connections: int = Field(..., description="Number of connections requested")
    status: Status = Field(Status.PENDING, description="Current lifecycle status")
    created_at: Optional[datetime] = Field(
        None, description="Creation time (durable store only)"
    )


class UserOut(BaseModel):
    """Public view of a user; never carries the password."""

    username: str = Field(..., description="Unique login name")
    role: Role = Field(..., description="Access role")


class Credentials(BaseModel):
    """Username and password pair for login and self-registration."""

    username: str = Field("", description="Login name")
    password: str = Field("", description="Password")


class NewUserRequest(Credentials):
    """Admin request to create an account with an explicit role."""

    role: Role = Field(Role.USER, description="Role for the new account")


class ApplicationCreate(BaseModel):
    """Raw form input for a new connection request.

    Values are validated by the lifecycle service, not by pydantic, so that
    the user sees the same messages regardless of the client.
    """

    name: str = Field("", description="Applicant's full name")
    mobile_no: str = Field("", description="Ten digit mobile number")
    address: str = Field("", description="Installation address")
    num_connections: Union[int, str] = Field(
        "", description="Number of connections requested"
    )


class StatusUpdate(BaseModel):
    """Admin request to overwrite an application's status."""

    status: str = Field(..., description="PENDING, APPROVED or REJECTED")


class ApplicationStatistics(BaseModel):
    """Aggregate figures for the admin dashboard."""

    total_users: int = Field(..., description="Number of registered users")
    total_applications: int = Field(..., description="Number of applications")
    status_counts: Dict[Status, int] = Field(
        ..., description="Applications per status"
    )
    approval_rate: float = Field(
        ..., description="Approved applications as a percentage of all applications"
    )
    applications_by_user: Dict[str, int] = Field(
        ..., description="Applications per applicant"
    )
    latest_application_at: Optional[datetime] = Field(
        None, description="Creation time of the newest application, if known"
    )


class ApplicationList(BaseModel):
    """A list of applications."""

    total: int = Field(..., description="Number of applications returned")
    data: List[Application] = Field(..., description="Applications")


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(..., description="Error message")
