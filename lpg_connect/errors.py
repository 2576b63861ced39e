"""Exception hierarchy shared by the services, stores and routers."""


class LPGConnectError(Exception):
    """Base class for all LPG Connect errors."""


class ValidationError(LPGConnectError, ValueError):
    """User-correctable input problem; the message is shown verbatim."""


class NotFoundError(LPGConnectError, LookupError):
    """A referenced application id or username does not exist."""


class ConflictError(LPGConnectError):
    """The requested change collides with existing data."""


class ApplicationBlockedError(ConflictError):
    """The applicant already has a PENDING or APPROVED application."""


class PermissionDeniedError(LPGConnectError):
    """The acting user's role does not allow the operation."""


class BackendUnavailableError(LPGConnectError):
    """The durable store could not be initialized."""


class StorageError(LPGConnectError):
    """A statement against the durable store failed."""
