"""Tests for contact number and email validators."""

import pytest
from pydantic import BaseModel, ValidationError

from pta.schemas.validators import ContactNumber, Email, validate_contact_number


class ContactModel(BaseModel):
    """Test model with contact fields."""
    contact_number: ContactNumber | None = None
    email: Email | None = None


class TestContactNumberValidator:
    """Tests for contact number validation."""

    def test_valid_number_compact(self):
        model = ContactModel(contact_number="+639171234567")
        assert model.contact_number == "+639171234567"

    def test_valid_number_with_spaces(self):
        model = ContactModel(contact_number="+63 917 123 4567")
        assert model.contact_number == "+639171234567"

    def test_valid_local_number_with_parentheses_and_dashes(self):
        model = ContactModel(contact_number="(0917) 123-4567")
        assert model.contact_number == "09171234567"

    def test_invalid_number_with_letters(self):
        with pytest.raises(ValidationError) as exc_info:
            ContactModel(contact_number="+63917123abcd")
        assert "Invalid contact number" in str(exc_info.value)

    def test_invalid_number_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            ContactModel(contact_number="+1234567890123456")
        assert "Invalid contact number" in str(exc_info.value)

    def test_plus_only_allowed_in_front(self):
        with pytest.raises(ValueError):
            validate_contact_number("0917+1234567")


class TestEmailValidator:
    """Tests for email validation."""

    def test_email_is_lowercased(self):
        model = ContactModel(email="Maria.Santos@Example.COM")
        assert model.email == "maria.santos@example.com"

    @pytest.mark.parametrize("value", ["not-an-email", "two@@example.com", "no-domain@example"])
    def test_invalid_email(self, value: str):
        with pytest.raises(ValidationError) as exc_info:
            ContactModel(email=value)
        assert "not a valid email address" in str(exc_info.value)
