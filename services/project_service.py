# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 项目发起 / 编辑 / 回报档位 / 支持（带归属校验）

from __future__ import annotations

from domains.crowdfunding_domain import (
    PaymentStatus,
    Pledge,
    PledgeCreate,
    Project,
    ProjectCreate,
    ProjectStatus,
    ProjectUpdate,
    Reward,
    RewardCreate,
)
from domains.error_domain import AppError, NotFoundError, PermissionDeniedError, ValidationAppError
from domains.user_domain import User
from infrastructures.store.entity_store import EntityStore
from infrastructures.vlogger import vlogger


class ProjectService:
    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def _require_project(self, project_id: int) -> Project:
        project = self._store.get_project(project_id)
        if project is None:
            raise NotFoundError(message="Project not found", details={"project_id": project_id})
        return project

    def _require_category(self, category_id: int | None) -> None:
        if category_id is None or self._store.get_category(category_id) is None:
            raise NotFoundError(message="Category not found", details={"category_id": category_id})

    @staticmethod
    def _ensure_can_manage(actor: User, project: Project) -> None:
        if actor.is_admin or project.creator_id == actor.id:
            return
        raise PermissionDeniedError(message="Only the creator or an admin can modify this project")

    def create_project(self, creator: User, payload: ProjectCreate) -> Project:
        self._require_category(payload.category_id)
        project = self._store.create_project(payload.model_copy(update={"creator_id": creator.id}))
        vlogger.info("project created project_id=%s creator_id=%s", project.id, creator.id)
        return project

    def update_project(self, actor: User, project_id: int, payload: ProjectUpdate) -> Project:
        project = self._require_project(project_id)
        self._ensure_can_manage(actor, project)
        if "category_id" in payload.model_fields_set:
            self._require_category(payload.category_id)
        return self._store.update_project(project_id, payload)

    def add_reward(self, actor: User, project_id: int, payload: RewardCreate) -> Reward:
        project = self._require_project(project_id)
        self._ensure_can_manage(actor, project)
        return self._store.create_reward(project_id, payload)

    def pledge(self, backer: User, project_id: int, payload: PledgeCreate) -> Pledge:
        """Record a pledge against a LIVE project.

        No payment gateway sits behind this, so pledges are booked as COMPLETED and
        count towards the project's totals immediately.
        """
        project = self._require_project(project_id)
        if project.status != ProjectStatus.live:
            raise AppError(code="PROJECT_NOT_LIVE", message="Project is not accepting pledges")

        if payload.reward_id is not None:
            reward = self._store.get_reward(payload.reward_id)
            if reward is None or reward.project_id != project_id:
                raise NotFoundError(message="Reward not found", details={"reward_id": payload.reward_id})
            if payload.amount < reward.amount:
                raise ValidationAppError(
                    message="Pledge amount is below the reward minimum",
                    details=[{"field": "amount", "minimum": str(reward.amount)}],
                )

        pledge = self._store.create_pledge(
            project_id,
            backer.id,
            payload.model_copy(update={"payment_status": PaymentStatus.completed}),
        )
        vlogger.info("pledge recorded pledge_id=%s project_id=%s amount=%s", pledge.id, project_id, pledge.amount)
        return pledge
