"""Tests for the User aggregate and the EmailAddress value object."""

import pytest
from protean.exceptions import ValidationError
from storefront.customer.user import User, UserProfileUpdated, UserRegistered
from storefront.shared.email import EmailAddress


class TestUserRegister:
    def test_register_creates_user(self):
        user = User.register(name="Jane Doe", email="jane@example.com")

        assert user.name == "Jane Doe"
        assert user.email.address == "jane@example.com"
        assert user.registered_at is not None

    def test_register_trims_input(self):
        user = User.register(name="  Jane Doe ", email=" jane@example.com ")

        assert user.name == "Jane Doe"
        assert user.email.address == "jane@example.com"

    def test_register_raises_user_registered(self):
        user = User.register(name="Jane Doe", email="jane@example.com")

        assert len(user._events) == 1
        event = user._events[0]
        assert isinstance(event, UserRegistered)
        assert event.user_id == str(user.id)
        assert event.email == "jane@example.com"

    def test_invalid_email_is_rejected(self):
        with pytest.raises(ValidationError):
            User.register(name="Jane Doe", email="not-an-email")


class TestUserUpdateProfile:
    def test_update_name_only(self):
        user = User.register(name="Jane Doe", email="jane@example.com")

        user.update_profile(name=" Jane Smith ")

        assert user.name == "Jane Smith"
        assert user.email.address == "jane@example.com"

    def test_update_email_only(self):
        user = User.register(name="Jane Doe", email="jane@example.com")

        user.update_profile(email="jane.smith@example.com")

        assert user.name == "Jane Doe"
        assert user.email.address == "jane.smith@example.com"

    def test_update_raises_user_profile_updated(self):
        user = User.register(name="Jane Doe", email="jane@example.com")

        user.update_profile(name="Jane Smith", email="jane.smith@example.com")

        event = user._events[-1]
        assert isinstance(event, UserProfileUpdated)
        assert event.user_id == str(user.id)
        assert event.name == "Jane Smith"
        assert event.email == "jane.smith@example.com"

    def test_invalid_email_is_rejected(self):
        user = User.register(name="Jane Doe", email="jane@example.com")

        with pytest.raises(ValidationError):
            user.update_profile(email="jane.example.com")


class TestEmailAddress:
    @pytest.mark.parametrize(
        "email",
        [
            "user@example.com",
            "user.name@example.com",
            "user+tag@example.com",
            "user@sub.domain.com",
            "user123@example.co.uk",
        ],
    )
    def test_valid_email_addresses(self, email):
        assert EmailAddress(address=email).address == email

    @pytest.mark.parametrize(
        "email",
        [
            "plainaddress",
            "@example.com",
            "user@",
            "user@@example.com",
            "user@localhost",
            ".user@example.com",
            "user.@example.com",
            "user..name@example.com",
            "user@-example.com",
            "user name@example.com",
            "user;name@example.com",
        ],
    )
    def test_invalid_email_addresses(self, email):
        with pytest.raises(ValidationError) as exc_info:
            EmailAddress(address=email)

        assert "email" in exc_info.value.messages

    def test_email_address_requires_address(self):
        with pytest.raises(ValidationError):
            EmailAddress()

    def test_normalized_lowercases(self):
        assert EmailAddress(address="Jane@Example.COM").normalized == "jane@example.com"
