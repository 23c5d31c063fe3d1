"""Request bodies accepted as JSON."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class PlaceUpdateRequest(BaseModel):
    title: str = ""
    description: str = ""
