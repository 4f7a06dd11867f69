"""Form models for login/registration and joke creation."""

from enum import Enum

from pydantic import BaseModel, ValidationError, field_validator

DEFAULT_REDIRECT = "/jokes"


class LoginType(str, Enum):
    LOGIN = "login"
    REGISTER = "register"


def safe_redirect_path(value: str | None, default: str = DEFAULT_REDIRECT) -> str:
    """Only allow local absolute paths as post-login redirect targets."""
    if not value or not value.startswith("/") or value.startswith("//") or "\\" in value:
        return default
    return value


def form_errors(exc: ValidationError) -> dict[str, str]:
    """Map a pydantic ValidationError to ``{field: message}`` for templates."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "form"
        if err["type"] == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        errors.setdefault(field, message)
    return errors


class LoginForm(BaseModel):
    """Submitted login or registration form."""

    login_type: LoginType
    username: str
    password: str
    redirect_to: str = DEFAULT_REDIRECT

    @field_validator("login_type", mode="before")
    @classmethod
    def validate_login_type(cls, v: str) -> str:
        if v not in {t.value for t in LoginType}:
            raise ValueError("Login type invalid")
        return v

    @field_validator("username", mode="after")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if len(v) < 3:
            raise ValueError("Usernames must be at least 3 characters long")
        return v

    @field_validator("password", mode="after")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Passwords must be at least 6 characters long")
        return v

    @field_validator("redirect_to", mode="before")
    @classmethod
    def validate_redirect_to(cls, v: str | None) -> str:
        return safe_redirect_path(v)


class NewJokeForm(BaseModel):
    """Submitted new-joke form."""

    name: str
    content: str

    @field_validator("name", mode="after")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if len(v) < 3:
            raise ValueError("That joke's name is too short")
        return v

    @field_validator("content", mode="after")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if len(v) < 10:
            raise ValueError("That joke is too short")
        return v
