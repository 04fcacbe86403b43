"""Domain layer - Pure business entities and errors"""

from .models import (
    User, Credential, Session, Priority, WorkItem, CheckboxState,
    AuditLogEntry, AuditEvent, ItemFilter, DashboardStats, PortalOptions,
)
from .errors import (
    PortalError, DuplicateAccountError, InvalidCredentialsError,
    PersistenceError, MalformedSessionDataError, FormValidationError,
)

__all__ = [
    "User", "Credential", "Session", "Priority", "WorkItem", "CheckboxState",
    "AuditLogEntry", "AuditEvent", "ItemFilter", "DashboardStats", "PortalOptions",
    "PortalError", "DuplicateAccountError", "InvalidCredentialsError",
    "PersistenceError", "MalformedSessionDataError", "FormValidationError",
]
