"""Inputs and results of the authentication workflow."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from lireddit.core.modules.user.models import User, UserView


class FieldError(BaseModel):
    """A rejected input field and the reason, rendered inline by the client."""

    field: str = Field(..., description="Name of the rejected input field")
    message: str = Field(..., description="Human-readable reason")


class UsernamePasswordInput(BaseModel):
    """Registration input."""

    email: str
    username: str
    password: str


class UserSuccess(BaseModel):
    kind: Literal["success"] = "success"
    user: UserView

    @classmethod
    def of(cls, user: User) -> "UserSuccess":
        return cls(user=UserView.from_domain(user))


class UserFailure(BaseModel):
    kind: Literal["failure"] = "failure"
    errors: list[FieldError] = Field(..., min_length=1)

    @classmethod
    def single(cls, field: str, message: str) -> "UserFailure":
        return cls(errors=[FieldError(field=field, message=message)])


UserResponse = Annotated[UserSuccess | UserFailure, Field(discriminator="kind")]
