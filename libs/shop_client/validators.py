"""Form validation shared by the API request schemas and client forms."""

import re
from dataclasses import dataclass, field
from typing import Literal, Optional

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 8
# bcrypt only hashes the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


@dataclass
class ValidationResult:
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_PATTERN.search(email) is not None


def validate_password(password: Optional[str]) -> bool:
    return (
        bool(password)
        and len(password) >= MIN_PASSWORD_LENGTH
        and not password_too_long(password)
    )


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def validate_required(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def validate_auth_form(
    values: dict,
    mode: Literal["signup", "login"],
    require_company_name: bool = False,
) -> ValidationResult:
    """Validate a login or signup form, collecting one message per field."""
    result = ValidationResult()
    errors = result.errors

    email = values.get("email")
    password = values.get("password")

    if not email:
        errors["email"] = "Email is required"
    elif not validate_email(email):
        errors["email"] = "Please enter a valid email address"

    if not password:
        errors["password"] = "Password is required"
    elif password_too_long(password):
        errors["password"] = (
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
        )
    elif not validate_password(password):
        errors["password"] = (
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    if mode == "signup":
        if not validate_required(values.get("firstName")):
            errors["firstName"] = "First name is required"
        if not validate_required(values.get("lastName")):
            errors["lastName"] = "Last name is required"
        if require_company_name and not validate_required(values.get("companyName")):
            errors["companyName"] = "Company name is required for business accounts."

        confirm = values.get("confirmPassword")
        if not confirm:
            errors["confirmPassword"] = "Please confirm your password"
        elif confirm != password:
            errors["confirmPassword"] = "Passwords do not match"

    required = ["email", "password"]
    if mode == "signup":
        required += ["firstName", "lastName", "confirmPassword"]
        if require_company_name:
            required.append("companyName")
    if any(not values.get(name) for name in required):
        errors["form"] = "Please fill in all fields"

    return result
