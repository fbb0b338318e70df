# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 认证相关请求/响应/令牌声明
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from domains.domain_base import DomainModel
from domains.user_domain import User, UserRole


class LoginRequest(DomainModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(DomainModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    password: str
    confirm_password: str
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class TokenClaims(DomainModel):
    sub: str
    id: int
    email: str
    name: str
    role: UserRole
    iss: str
    iat: int
    exp: int


class AuthMeta(DomainModel):
    token_expiry: datetime
    user_id: int


class AuthResponse(DomainModel):
    token: str
    user: User
    meta: AuthMeta
