# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 内存实体仓储（用户 / 类目 / 项目 / 回报 / 支持记录）

from __future__ import annotations

import threading
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from domains.crowdfunding_domain import (
    Category,
    CategoryCreate,
    PaymentStatus,
    Pledge,
    PledgeCreate,
    Project,
    ProjectCreate,
    ProjectUpdate,
    ProjectWithDetails,
    Reward,
    RewardCreate,
)
from domains.domain_base import utc_now
from domains.error_domain import AppError, ConflictError, NotFoundError, ValidationAppError
from domains.user_domain import User, UserCreate, UserRole

# 非 passlib 格式，任何密码都无法校验通过
UNUSABLE_PASSWORD_HASH = "!unusable"


class EntityStore:
    """Process-wide in-memory tables.

    Sole owner of every entity map and id counter. Mutations are serialized by one
    re-entrant lock; nothing here blocks on I/O. Data does not survive a restart.
    """

    def __init__(self, *, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or utc_now
        self._lock = threading.RLock()

        self._users: Dict[int, User] = {}
        self._categories: Dict[int, Category] = {}
        self._projects: Dict[int, Project] = {}
        self._rewards: Dict[int, Reward] = {}
        self._pledges: Dict[int, Pledge] = {}

        self._next_ids: Dict[str, int] = {
            "user": 1,
            "category": 1,
            "project": 1,
            "reward": 1,
            "pledge": 1,
        }

    def _allocate_id(self, table: str) -> int:
        new_id = self._next_ids[table]
        self._next_ids[table] = new_id + 1
        return new_id

    # =========================
    # Users
    # =========================

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def list_users(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def create_user(self, data: UserCreate) -> User:
        return self.create_user_with_password(data, UNUSABLE_PASSWORD_HASH)

    def create_user_with_password(self, data: UserCreate, password_hash: str) -> User:
        with self._lock:
            if self.get_user_by_email(data.email) is not None:
                raise ConflictError(message="User already exists", code="USER_EXISTS")

            now = self._clock()
            user = User(
                id=self._allocate_id("user"),
                name=data.name,
                email=data.email,
                password_hash=password_hash,
                bio=data.bio or None,
                profile_image_url=data.profile_image_url or None,
                role=data.role or UserRole.user,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            return user

    # =========================
    # Categories
    # =========================

    def get_categories(self) -> List[Category]:
        with self._lock:
            return list(self._categories.values())

    def get_category(self, category_id: int) -> Optional[Category]:
        return self._categories.get(category_id)

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        with self._lock:
            return next((c for c in self._categories.values() if c.slug == slug), None)

    def create_category(self, data: CategoryCreate) -> Category:
        with self._lock:
            if self.get_category_by_slug(data.slug) is not None:
                raise ConflictError(message=f"Category slug already exists: {data.slug}")

            category = Category(
                id=self._allocate_id("category"),
                created_at=self._clock(),
                **data.model_dump(),
            )
            self._categories[category.id] = category
            return category

    # =========================
    # Projects
    # =========================

    def list_projects(self) -> List[Project]:
        with self._lock:
            return list(self._projects.values())

    def get_project(self, project_id: int) -> Optional[Project]:
        return self._projects.get(project_id)

    def create_project(self, data: ProjectCreate, *, created_at: Optional[datetime] = None) -> Project:
        with self._lock:
            now = created_at or self._clock()
            project = Project(
                id=self._allocate_id("project"),
                pledged=Decimal("0"),
                backer_count=0,
                created_at=now,
                updated_at=now,
                **data.model_dump(),
            )
            self._projects[project.id] = project
            return project

    def update_project(self, project_id: int, updates: Union[ProjectUpdate, Dict]) -> Project:
        if isinstance(updates, ProjectUpdate):
            changes = updates.model_dump(exclude_unset=True)
        else:
            changes = dict(updates)
        changes.pop("id", None)
        changes.pop("created_at", None)

        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                raise NotFoundError(message="Project not found", details={"project_id": project_id})

            merged = project.model_dump(exclude={"progress_percent"})
            merged.update(changes)
            merged["updated_at"] = self._clock()

            try:
                updated = Project.model_validate(merged)
            except ValidationError as exc:
                raise ValidationAppError(
                    message="Invalid project update",
                    details=exc.errors(include_url=False, include_context=False),
                ) from exc
            self._projects[project_id] = updated
            return updated

    def get_project_by_id(self, project_id: int) -> Optional[ProjectWithDetails]:
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                return None

            # 严格关联：创建者或类目缺失时整体视为不存在
            creator = self._users.get(project.creator_id) if project.creator_id is not None else None
            category = self._categories.get(project.category_id) if project.category_id is not None else None
            if creator is None or category is None:
                return None

            return ProjectWithDetails(
                **project.model_dump(exclude={"progress_percent"}),
                creator=creator,
                category=category,
                rewards=self._list_rewards_unlocked(project_id),
                pledges=self._list_pledges_unlocked(project_id),
            )

    # =========================
    # Rewards / Pledges
    # =========================

    def create_reward(self, project_id: int, data: RewardCreate) -> Reward:
        with self._lock:
            if project_id not in self._projects:
                raise NotFoundError(message="Project not found", details={"project_id": project_id})

            reward = Reward(
                id=self._allocate_id("reward"),
                project_id=project_id,
                created_at=self._clock(),
                **data.model_dump(),
            )
            self._rewards[reward.id] = reward
            return reward

    def get_reward(self, reward_id: int) -> Optional[Reward]:
        return self._rewards.get(reward_id)

    def list_rewards(self, project_id: int) -> List[Reward]:
        with self._lock:
            return self._list_rewards_unlocked(project_id)

    def _list_rewards_unlocked(self, project_id: int) -> List[Reward]:
        return [r for r in self._rewards.values() if r.project_id == project_id]

    def create_pledge(self, project_id: int, user_id: int, data: PledgeCreate) -> Pledge:
        """Insert a pledge; a COMPLETED one also bumps the project's pledged total and backer count."""
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                raise NotFoundError(message="Project not found", details={"project_id": project_id})
            if user_id not in self._users:
                raise NotFoundError(message="User not found", details={"user_id": user_id})
            if data.reward_id is not None:
                self._ensure_reward_available(data.reward_id)

            pledge = Pledge(
                id=self._allocate_id("pledge"),
                project_id=project_id,
                user_id=user_id,
                created_at=self._clock(),
                **data.model_dump(),
            )
            self._pledges[pledge.id] = pledge

            if pledge.payment_status == PaymentStatus.completed:
                self.update_project(
                    project_id,
                    {
                        "pledged": project.pledged + pledge.amount,
                        "backer_count": project.backer_count + 1,
                    },
                )
            return pledge

    def _ensure_reward_available(self, reward_id: int) -> None:
        reward = self._rewards.get(reward_id)
        if reward is None or reward.quantity is None:
            return
        taken = sum(
            1 for p in self._pledges.values()
            if p.reward_id == reward_id and p.payment_status != PaymentStatus.failed
        )
        if taken >= reward.quantity:
            raise AppError(
                code="REWARD_SOLD_OUT",
                message="Reward is no longer available",
                details={"reward_id": reward_id, "quantity": reward.quantity},
            )

    def list_pledges(self, project_id: int) -> List[Pledge]:
        with self._lock:
            return self._list_pledges_unlocked(project_id)

    def _list_pledges_unlocked(self, project_id: int) -> List[Pledge]:
        return [p for p in self._pledges.values() if p.project_id == project_id]
