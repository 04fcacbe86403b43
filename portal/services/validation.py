"""
Form validation run before any auth call.
"""

from portal.domain.errors import FormValidationError


def validate_login_form(email: str, password: str) -> None:
    if not email or not password:
        raise FormValidationError("Please fill in all fields.")


def validate_registration_form(email: str, password: str, confirm_password: str,
                               min_password_length: int = 6) -> None:
    """
    Check a registration form.

    Raises:
        FormValidationError: a field is empty, the passwords differ or the
            password is too short
    """
    if not email or not password or not confirm_password:
        raise FormValidationError("Please fill in all fields.")

    if password != confirm_password:
        raise FormValidationError("Passwords do not match.")

    if len(password) < min_password_length:
        raise FormValidationError(f"Password must be at least {min_password_length} characters long.")
