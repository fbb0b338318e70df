# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 用户域模型
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from domains.domain_base import DomainModel, utc_now


class UserRole(str, Enum):
    user = "USER"
    admin = "ADMIN"


class UserCreate(DomainModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: str
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: UserRole = UserRole.user


class User(DomainModel):
    id: int
    name: str
    email: str
    # 序列化时永不输出
    password_hash: str = Field(..., exclude=True, repr=False)

    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: UserRole = UserRole.user

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin
