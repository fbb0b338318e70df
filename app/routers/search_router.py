# -*- coding: utf-8 -*-
# @File: search_router.py

from __future__ import annotations

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query

from app.deps import get_query_service
from domains.crowdfunding_domain import Project, SearchSuggestion
from domains.error_domain import AppError
from services.project_query_service import ProjectQueryService

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=List[Project])
async def search_projects(
    query_service: Annotated[ProjectQueryService, Depends(get_query_service)],
    q: Optional[str] = None,
    limit: int = Query(default=10, ge=1),
) -> List[Project]:
    if not q:
        raise AppError(code="SEARCH_QUERY_REQUIRED", message="Search query is required", http_status=400)
    return query_service.search_projects(q, limit)


@router.get("/suggestions", response_model=List[SearchSuggestion])
async def search_suggestions(
    query_service: Annotated[ProjectQueryService, Depends(get_query_service)],
    q: Optional[str] = None,
) -> List[SearchSuggestion]:
    if not q:
        return []
    return query_service.search_suggestions(q, limit=5)
