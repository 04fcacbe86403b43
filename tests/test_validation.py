"""
Tests for login and registration form validation.
"""

import pytest

from portal.domain.errors import FormValidationError
from portal.services.validation import validate_login_form, validate_registration_form


@pytest.mark.parametrize("email, password", [("", "secret1"), ("a@x.com", ""), ("", "")])
def test_login_requires_both_fields(email, password):
    with pytest.raises(FormValidationError, match="fill in all fields"):
        validate_login_form(email, password)


def test_login_accepts_filled_form():
    validate_login_form("a@x.com", "x")


def test_registration_requires_all_fields():
    with pytest.raises(FormValidationError, match="fill in all fields"):
        validate_registration_form("a@x.com", "secret1", "")


def test_registration_passwords_must_match():
    with pytest.raises(FormValidationError, match="do not match"):
        validate_registration_form("a@x.com", "secret1", "secret2")


def test_registration_password_length():
    with pytest.raises(FormValidationError, match="at least 6 characters"):
        validate_registration_form("a@x.com", "short", "short")
    validate_registration_form("a@x.com", "secret", "secret")


def test_registration_custom_minimum():
    with pytest.raises(FormValidationError, match="at least 10 characters"):
        validate_registration_form("a@x.com", "secret1", "secret1", min_password_length=10)
