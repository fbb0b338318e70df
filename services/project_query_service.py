# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 项目列表 / 精选 / 搜索（只读视图，不修改仓储）

from __future__ import annotations

from typing import List, Optional

from domains.crowdfunding_domain import Project, ProjectFilters, ProjectStatus, SearchSuggestion
from infrastructures.store.entity_store import EntityStore


def _newest_first(project: Project):
    return project.created_at, project.id


class ProjectQueryService:
    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def get_projects(self, filters: Optional[ProjectFilters] = None) -> List[Project]:
        """Filter, then sort newest first, then truncate.

        An unknown category slug yields an empty list rather than ignoring the filter.
        """
        filters = filters or ProjectFilters()
        projects = self._store.list_projects()

        if filters.category:
            category = self._store.get_category_by_slug(filters.category)
            if category is None:
                return []
            projects = [p for p in projects if p.category_id == category.id]

        if filters.status is not None:
            projects = [p for p in projects if p.status == filters.status]

        projects.sort(key=_newest_first, reverse=True)

        if filters.limit is not None:
            projects = projects[: filters.limit]
        return projects

    def get_featured_projects(self, limit: int = 6) -> List[Project]:
        live = [p for p in self._store.list_projects() if p.status == ProjectStatus.live]
        # pledged 是 Decimal，按数值比较
        live.sort(key=lambda p: p.pledged, reverse=True)
        return live[: max(0, limit)]

    def search_projects(self, query: str, limit: int = 10) -> List[Project]:
        needle = query.lower()
        hits: List[Project] = []
        for project in self._store.list_projects():
            if len(hits) >= limit:
                break
            fields = (project.title, project.subtitle, project.description)
            if any(f and needle in f.lower() for f in fields):
                hits.append(project)
        return hits

    def search_suggestions(self, query: str, limit: int = 5) -> List[SearchSuggestion]:
        return [
            SearchSuggestion(id=p.id, title=p.title, subtitle=p.subtitle)
            for p in self.search_projects(query, limit=limit)
        ]
