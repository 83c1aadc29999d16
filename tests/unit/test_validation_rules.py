"""Unit tests for the validation rule builder."""

import asyncio
from dataclasses import dataclass

import pytest

from taskforge.application.cancellation import CancellationToken
from taskforge.application.validation import Validator, group_failures, password_complexity
from taskforge.domain.exceptions import RequestCancelled


@dataclass
class SignUp:
    name: str | None = None
    email: str | None = None
    password: str | None = None


class SignUpValidator(Validator[SignUp]):
    def __init__(self, taken: set[str]) -> None:
        super().__init__()
        self._taken = taken
        self.rule_for("name").not_empty().max_length(5)
        (
            self.rule_for("email")
            .not_empty("Email is required")
            .email()
            .must_async(self._available, "Email is already registered")
        )
        password_complexity(self.rule_for("password"))

    async def _available(self, email, token) -> bool:
        await asyncio.sleep(0)
        return email not in self._taken


@pytest.mark.asyncio
async def test_valid_request_has_no_failures() -> None:
    failures = await SignUpValidator(set()).validate(
        SignUp(name="Ada", email="ada@example.com", password="Zx9!kQ#vLm")
    )
    assert failures == []


@pytest.mark.asyncio
async def test_all_failures_are_collected() -> None:
    failures = await SignUpValidator(set()).validate(SignUp(name="", email="nope", password="short"))
    errors = group_failures(failures)

    assert errors["name"] == ["Name cannot be empty"]
    assert errors["email"] == ["Email is not a valid email address"]
    assert "Password must be at least 8 characters long" in errors["password"]
    assert "Password must contain at least one uppercase letter" in errors["password"]
    assert "Password must contain at least one number" in errors["password"]


@pytest.mark.asyncio
async def test_async_rule_failure_reported() -> None:
    failures = await SignUpValidator({"ada@example.com"}).validate(
        SignUp(name="Ada", email="ada@example.com", password="Zx9!kQ#vLm")
    )
    assert group_failures(failures) == {"email": ["Email is already registered"]}


@pytest.mark.asyncio
async def test_empty_values_skip_format_checks() -> None:
    failures = await SignUpValidator(set()).validate(SignUp(name="Ada", email=None, password="Zx9!kQ#vLm"))
    assert group_failures(failures) == {"email": ["Email is required"]}


@pytest.mark.asyncio
async def test_common_password_rejected() -> None:
    failures = await SignUpValidator(set()).validate(
        SignUp(name="Ada", email="ada@example.com", password="MyPassword1!")
    )
    assert group_failures(failures) == {
        "password": ["Password is too common, please choose a stronger password"]
    }


@pytest.mark.asyncio
async def test_optional_password_may_be_missing() -> None:
    class OptionalPassword(Validator[SignUp]):
        def __init__(self) -> None:
            super().__init__()
            password_complexity(self.rule_for("password"), required=False)

    assert await OptionalPassword().validate(SignUp(password=None)) == []
    assert await OptionalPassword().validate(SignUp(password="weak")) != []


@pytest.mark.asyncio
async def test_cancelled_token_aborts_validation() -> None:
    token = CancellationToken()
    token.cancel()
    with pytest.raises(RequestCancelled):
        await SignUpValidator(set()).validate(SignUp(name="Ada"), token)


def test_group_failures_preserves_order() -> None:
    from taskforge.application.validation import ValidationFailure

    failures = [
        ValidationFailure("b", "one"),
        ValidationFailure("a", "two"),
        ValidationFailure("b", "three"),
    ]
    assert group_failures(failures) == {"b": ["one", "three"], "a": ["two"]}
