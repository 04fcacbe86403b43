"""
Portal error taxonomy.

Every error a service can raise derives from PortalError, so the
presentation boundary can catch one type and show the message.
"""


class PortalError(Exception):
    """Base class for all portal errors"""


class DuplicateAccountError(PortalError):
    """Registration with an email that already has an account"""

    def __init__(self, email: str):
        super().__init__("User already exists")
        self.email = email


class InvalidCredentialsError(PortalError):
    """No stored credential matches the given email and password"""

    def __init__(self):
        super().__init__("Invalid credentials")


class PersistenceError(PortalError):
    """The key-value store could not be read or written"""


class MalformedSessionDataError(PortalError):
    """
    The persisted session is not valid JSON or has the wrong shape.

    Soft failure: the auth service treats it as "no session".
    """


class FormValidationError(PortalError):
    """Local form validation failed; no service call was attempted"""
