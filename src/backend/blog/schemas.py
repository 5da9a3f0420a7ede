from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from blog import models


def _not_blank(v: str) -> str:
    if len(v.strip()) == 0:
        raise ValueError("must not be blank")
    return v.strip()


class JoinRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50, description="login name")
    password: str = Field(..., min_length=1, max_length=255, description="password")
    email: Optional[EmailStr] = Field(None, description="contact email")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _not_blank(v)

    def to_entity(self) -> models.User:
        return models.User(username=self.username, password=self.password, email=self.email)


class UserUpdateRequest(BaseModel):
    password: str = Field(..., min_length=1, max_length=255, description="new password")


class BoardSaveRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=100, description="post title")
    content: str = Field(..., min_length=1, description="post body")

    @field_validator("title", "content")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _not_blank(v)

    def to_entity(self, user: models.User) -> models.Board:
        return models.Board(title=self.title, content=self.content, user=user)


class BoardUpdateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=100, description="post title")
    content: str = Field(..., min_length=1, description="post body")

    @field_validator("title", "content")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _not_blank(v)

