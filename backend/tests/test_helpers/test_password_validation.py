"""Tests for password validation helper."""

from helpers.password_validation import (
    PASSWORD_MIN_LENGTH,
    validate_password_complexity,
)


class TestPasswordValidation:
    """Test cases for password complexity validation."""

    def test_valid_password(self):
        is_valid, errors = validate_password_complexity("MyP@ssw0rd123!")
        assert is_valid is True
        assert errors == []

    def test_password_too_short(self):
        is_valid, errors = validate_password_complexity("Sh0rt!")
        assert is_valid is False
        assert errors == [
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
        ]

    def test_missing_uppercase(self):
        is_valid, errors = validate_password_complexity("lowercase123!abc")
        assert is_valid is False
        assert any("uppercase letter" in error for error in errors)

    def test_missing_lowercase(self):
        _, errors = validate_password_complexity("UPPERCASE123!ABC")
        assert any("lowercase letter" in error for error in errors)

    def test_missing_digit(self):
        _, errors = validate_password_complexity("NoDigitsHere!!ab")
        assert any("digit" in error for error in errors)

    def test_missing_special(self):
        _, errors = validate_password_complexity("NoSpecials1234ab")
        assert errors == ["Password must contain at least one special character"]

    def test_reports_every_failure(self):
        """All failing rules are reported, not just the first."""
        is_valid, errors = validate_password_complexity("abc")
        assert is_valid is False
        assert len(errors) == 4
