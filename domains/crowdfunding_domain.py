# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 众筹域模型（类目 / 项目 / 回报档位 / 支持记录 / 查询条件）
from __future__ import annotations

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Optional

from pydantic import Field, computed_field

from domains.domain_base import DomainModel, utc_now
from domains.user_domain import User

_HUNDRED = Decimal("100")


class ProjectStatus(str, Enum):
    draft = "DRAFT"
    live = "LIVE"
    ended = "ENDED"
    funded = "FUNDED"


class PaymentStatus(str, Enum):
    pending = "PENDING"
    completed = "COMPLETED"
    failed = "FAILED"


# =========================
# Category
# =========================

class CategoryCreate(DomainModel):
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    description: Optional[str] = None
    icon_name: str
    color: str
    project_count: int = Field(default=0, ge=0)


class Category(DomainModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    icon_name: str
    color: str
    # 展示用冗余计数，不随项目增减重算
    project_count: int = 0
    created_at: datetime = Field(default_factory=utc_now)


# =========================
# Project
# =========================

class ProjectCreate(DomainModel):
    title: str = Field(..., min_length=1, max_length=200)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    goal: Decimal = Field(..., ge=0)
    duration_days: int = Field(..., ge=1)
    status: ProjectStatus = ProjectStatus.draft
    hero_image_url: Optional[str] = None
    creator_id: Optional[int] = None
    category_id: Optional[int] = None
    end_date: Optional[datetime] = None


class ProjectUpdate(DomainModel):
    """Partial update; only fields explicitly set are merged."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    goal: Optional[Decimal] = Field(default=None, ge=0)
    duration_days: Optional[int] = Field(default=None, ge=1)
    status: Optional[ProjectStatus] = None
    hero_image_url: Optional[str] = None
    category_id: Optional[int] = None
    end_date: Optional[datetime] = None


class Project(DomainModel):
    id: int
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    goal: Decimal = Field(..., ge=0)
    pledged: Decimal = Field(default=Decimal("0"), ge=0)
    duration_days: int
    status: ProjectStatus = ProjectStatus.draft
    hero_image_url: Optional[str] = None
    creator_id: Optional[int] = None
    category_id: Optional[int] = None
    backer_count: int = 0
    end_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @computed_field(alias="progressPercent")
    @property
    def progress_percent(self) -> Decimal:
        if self.goal <= 0:
            return Decimal("0.00")
        ratio = min(self.pledged / self.goal * _HUNDRED, _HUNDRED)
        return ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


# =========================
# Reward / Pledge
# =========================

class RewardCreate(DomainModel):
    title: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    description: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0)
    shipping_regions: List[str] = Field(default_factory=list)


class Reward(DomainModel):
    id: int
    project_id: int
    title: str
    amount: Decimal
    description: Optional[str] = None
    quantity: Optional[int] = None
    shipping_regions: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)


class PledgeCreate(DomainModel):
    amount: Decimal = Field(..., gt=0)
    reward_id: Optional[int] = None
    payment_status: PaymentStatus = PaymentStatus.pending


class Pledge(DomainModel):
    id: int
    project_id: int
    user_id: int
    reward_id: Optional[int] = None
    amount: Decimal = Field(..., gt=0)
    payment_status: PaymentStatus = PaymentStatus.pending
    created_at: datetime = Field(default_factory=utc_now)


class ProjectWithDetails(Project):
    creator: User
    category: Category
    rewards: List[Reward] = Field(default_factory=list)
    pledges: List[Pledge] = Field(default_factory=list)


# =========================
# Query
# =========================

class ProjectFilters(DomainModel):
    category: Optional[str] = Field(default=None, description="类目 slug")
    status: Optional[ProjectStatus] = None
    limit: Optional[int] = Field(default=None, ge=1)


class SearchSuggestion(DomainModel):
    id: int
    title: str
    subtitle: Optional[str] = None
