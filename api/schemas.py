from __future__ import annotations

from pydantic import BaseModel


class LoginForm(BaseModel):
    zone: str = ""
    password: str = ""


class OfficeAuthForm(BaseModel):
    location: str = ""
    password: str = ""
