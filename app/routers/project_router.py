# -*- coding: utf-8 -*-
# @File: project_router.py

from __future__ import annotations

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.deps import get_current_user, get_project_service, get_query_service, get_store
from domains.crowdfunding_domain import (
    Pledge,
    PledgeCreate,
    Project,
    ProjectCreate,
    ProjectFilters,
    ProjectStatus,
    ProjectUpdate,
    ProjectWithDetails,
    Reward,
    RewardCreate,
)
from domains.error_domain import NotFoundError
from domains.user_domain import User
from infrastructures.store.entity_store import EntityStore
from services.project_query_service import ProjectQueryService
from services.project_service import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[Project])
async def list_projects(
    query_service: Annotated[ProjectQueryService, Depends(get_query_service)],
    category: Optional[str] = Query(default=None, description="category slug"),
    status_: Optional[ProjectStatus] = Query(default=None, alias="status"),
    limit: Optional[int] = Query(default=None, ge=1),
) -> List[Project]:
    filters = ProjectFilters(category=category or None, status=status_, limit=limit)
    return query_service.get_projects(filters)


@router.get("/featured", response_model=List[Project])
async def list_featured_projects(
    query_service: Annotated[ProjectQueryService, Depends(get_query_service)],
    limit: int = Query(default=6, ge=1),
) -> List[Project]:
    return query_service.get_featured_projects(limit)


@router.get("/{project_id}", response_model=ProjectWithDetails)
async def get_project(
    project_id: int,
    store: Annotated[EntityStore, Depends(get_store)],
) -> ProjectWithDetails:
    project = store.get_project_by_id(project_id)
    if project is None:
        raise NotFoundError(message="Project not found", details={"project_id": project_id})
    return project


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
) -> Project:
    return project_service.create_project(current_user, body)


@router.patch("/{project_id}", response_model=Project)
async def update_project(
    project_id: int,
    body: ProjectUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
) -> Project:
    return project_service.update_project(current_user, project_id, body)


@router.post("/{project_id}/rewards", response_model=Reward, status_code=status.HTTP_201_CREATED)
async def add_reward(
    project_id: int,
    body: RewardCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
) -> Reward:
    return project_service.add_reward(current_user, project_id, body)


@router.post("/{project_id}/pledges", response_model=Pledge, status_code=status.HTTP_201_CREATED)
async def create_pledge(
    project_id: int,
    body: PledgeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
) -> Pledge:
    return project_service.pledge(current_user, project_id, body)
