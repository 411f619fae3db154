"""
Request and response bodies of the task-management API, as far as the
fixtures need them.

Example login response:
{
  "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
  "user": {"id": 7, "username": "dredd_test_1741570283000_0", "email": "dredd_test_1741570283000_0@test.com"}
}

Older builds of the service answer login with the token only, so ``user`` is optional.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCredentials(BaseModel):
    email: str = Field()
    password: str = Field()


class RegisterRequest(BaseModel):
    username: str = Field()
    email: str = Field()
    password: str = Field()


class UserInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int = Field()
    username: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    token: str = Field(min_length=1)
    user: Optional[UserInfo] = Field(default=None)


class TaskCreate(BaseModel):
    title: str = Field()
    description: str = Field(default="")
    status: Literal["pending", "in_progress", "completed"] = Field(default="pending")
    priority: Literal["low", "medium", "high"] = Field(default="medium")


class TaskRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int = Field()
    title: str = Field(default="")
    description: Optional[str] = Field(default=None)
    status: Optional[str] = Field(default=None)
    priority: Optional[str] = Field(default=None)
    user_id: Optional[int] = Field(default=None)
