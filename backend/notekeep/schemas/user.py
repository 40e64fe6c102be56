"""
NoteKeep Backend — User Request/Response Schemas
=================================================

What:  Pydantic models for registration, login, and the public user summary.
How:   Field constraints mirror the users table; FastAPI rejects violations
       with 422 before any handler runs.

Wire format:
    JSON keys are camelCase (fullName). Input also accepts snake_case
    (full_name) through populate_by_name.

The password is accepted on input only. No response model has a password
field, so it cannot leak through serialization.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for schemas exchanged with the frontend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class UserCreate(CamelModel):
    """
    What:  Body of POST /api/auth/register.

    Unknown keys (id, notes, ...) are ignored, so a client cannot choose
    its own id.
    """
    username: str = Field(min_length=3, max_length=20, description="Unique login handle")
    full_name: str = Field(min_length=3, max_length=50, description="Display name")
    email: EmailStr = Field(description="Unique email address, used to log in")
    password: str = Field(min_length=6, max_length=100, description="Plain password, hashed before storage")

    @field_validator("username", "full_name", "password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Length alone lets "   " through; every field needs real characters."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class LoginRequest(CamelModel):
    """
    What:  Body of POST /api/auth/login.

    Why plain str for email: a malformed address is just a failed login
    (401), not a schema error. UserService.authenticate normalizes it the
    way EmailStr did at registration before looking it up.
    """
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=100)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserSummary(CamelModel):
    """
    What:  Reduced, password-free view of a user.
    Who:   Nested in every NoteResponse; returned by GET /api/auth/me.
    """
    id: int = Field(description="User identifier")
    username: str = Field(description="Login handle")
    full_name: str = Field(description="Display name")
    email: str = Field(description="Email address")

    # Merged with CamelModel config: read straight from ORM attributes
    model_config = ConfigDict(from_attributes=True)
