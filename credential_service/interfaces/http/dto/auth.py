from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from credential_service.domain.users.entities import User


# Presence checks only: a field passes when it is a non-empty string.
class RegisterRequestDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: StrictStr = Field(min_length=1)
    password: StrictStr = Field(min_length=1)
    name: StrictStr = Field(min_length=1)


class LoginRequestDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: StrictStr = Field(min_length=1)
    password: StrictStr = Field(min_length=1)


class LoginUserDTO(BaseModel):
    email: str
    id: str

    @classmethod
    def from_user(cls, user: User) -> LoginUserDTO:
        return cls(email=user.email, id=user.id)


class UserDTO(BaseModel):
    email: str
    name: str
    id: str

    @classmethod
    def from_user(cls, user: User) -> UserDTO:
        return cls(email=user.email, name=user.name, id=user.id)


class LoginSuccessDTO(BaseModel):
    message: str = "Login successful"
    token: str
    user: LoginUserDTO


class RegisterSuccessDTO(BaseModel):
    message: str = "User registered successfully"
    user: UserDTO


class CurrentUserDTO(BaseModel):
    user: UserDTO
