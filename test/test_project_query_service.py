# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 列表过滤 / 排序 / 截断顺序，精选与搜索

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest
from pydantic import ValidationError

from domains.crowdfunding_domain import ProjectCreate, ProjectFilters, ProjectStatus
from domains.domain_base import utc_now
from infrastructures.store.entity_store import EntityStore
from services.project_query_service import ProjectQueryService


def _add_project(store: EntityStore, *, category_id: int, status: ProjectStatus, pledged: str = "0",
                 minutes_from_now: int = 10, title: str = "Extra project"):
    project = store.create_project(
        ProjectCreate(title=title, goal=Decimal("1000"), duration_days=10, status=status,
                      creator_id=1, category_id=category_id),
        created_at=utc_now() + timedelta(minutes=minutes_from_now),
    )
    return store.update_project(project.id, {"pledged": Decimal(pledged)})


def test_no_filters_returns_all_newest_first(query_service: ProjectQueryService) -> None:
    projects = query_service.get_projects()
    assert [p.id for p in projects] == [6, 5, 4, 3, 2, 1]
    assert all(a.created_at >= b.created_at for a, b in zip(projects, projects[1:]))


def test_filters_apply_together(query_service: ProjectQueryService, store: EntityStore) -> None:
    everything = {p.id for p in store.list_projects()}
    env = store.get_category_by_slug("environment")

    result = query_service.get_projects(ProjectFilters(category="environment", status=ProjectStatus.live))

    assert {p.id for p in result} <= everything
    assert [p.id for p in result] == [3]
    assert all(p.category_id == env.id and p.status == ProjectStatus.live for p in result)


def test_category_filter_only(query_service: ProjectQueryService) -> None:
    result = query_service.get_projects(ProjectFilters(category="environment"))
    assert [p.id for p in result] == [6, 3]


def test_status_filter_only(query_service: ProjectQueryService) -> None:
    result = query_service.get_projects(ProjectFilters(status=ProjectStatus.funded))
    assert [p.title for p in result] == ["Clean Water Initiative"]


def test_unknown_category_slug_yields_empty(query_service: ProjectQueryService) -> None:
    assert query_service.get_projects(ProjectFilters(category="no-such-slug")) == []


def test_invalid_status_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ProjectFilters(status="ACTIVE")


def test_limit_applies_after_filter_and_sort(query_service: ProjectQueryService, store: EntityStore) -> None:
    # 更新的项目属于别的类目，不应挤掉过滤后的结果
    _add_project(store, category_id=1, status=ProjectStatus.live, minutes_from_now=30)

    assert query_service.get_projects(ProjectFilters(limit=1))[0].id == 7

    result = query_service.get_projects(ProjectFilters(category="environment", limit=1))
    assert [p.id for p in result] == [6]


def test_limit_returns_newest_of_filtered_set(query_service: ProjectQueryService, store: EntityStore) -> None:
    newer = _add_project(store, category_id=5, status=ProjectStatus.live, minutes_from_now=5)
    newest = _add_project(store, category_id=5, status=ProjectStatus.live, minutes_from_now=20)

    result = query_service.get_projects(ProjectFilters(category="environment", status=ProjectStatus.live, limit=2))
    assert [p.id for p in result] == [newest.id, newer.id]


def test_featured_only_live_sorted_by_numeric_pledged(query_service: ProjectQueryService) -> None:
    featured = query_service.get_featured_projects()

    assert all(p.status == ProjectStatus.live for p in featured)
    assert [p.id for p in featured] == [1, 2, 3, 4, 5]
    assert len(query_service.get_featured_projects(limit=2)) == 2


def test_featured_compares_amounts_as_numbers(query_service: ProjectQueryService, store: EntityStore) -> None:
    for pledged in ("9000", "8999.50", "100000", "950"):
        _add_project(store, category_id=1, status=ProjectStatus.live, pledged=pledged)

    ranked = [p.pledged for p in query_service.get_featured_projects(limit=20)]

    assert ranked == sorted(ranked, reverse=True)
    assert ranked[0] == Decimal("100000")
    assert ranked.index(Decimal("9000")) < ranked.index(Decimal("8999.50"))
    assert ranked.index(Decimal("18750")) < ranked.index(Decimal("9000"))


def test_search_is_case_insensitive(query_service: ProjectQueryService) -> None:
    lower = query_service.search_projects("solar", 10)
    upper = query_service.search_projects("SOLAR", 10)

    assert "Solar Power for Rural Communities" in [p.title for p in lower]
    assert [p.id for p in lower] == [p.id for p in upper]


def test_search_matches_subtitle_and_description(query_service: ProjectQueryService) -> None:
    assert [p.id for p in query_service.search_projects("iot-powered")] == [3]
    assert [p.id for p in query_service.search_projects("telemedicine")] == [4]
    assert query_service.search_projects("zzz-nothing") == []


def test_search_respects_limit_in_table_order(query_service: ProjectQueryService) -> None:
    all_hits = query_service.search_projects("and", 10)
    limited = query_service.search_projects("and", 2)

    assert len(all_hits) > 2
    assert [p.id for p in limited] == [p.id for p in all_hits[:2]]
    assert [p.id for p in all_hits] == sorted(p.id for p in all_hits)


def test_search_suggestions_shape(query_service: ProjectQueryService) -> None:
    suggestions = query_service.search_suggestions("a")
    assert 0 < len(suggestions) <= 5
    assert set(suggestions[0].to_dict()) == {"id", "title", "subtitle"}


def test_queries_do_not_mutate_store(query_service: ProjectQueryService, store: EntityStore) -> None:
    before = [p.id for p in store.list_projects()]
    query_service.get_projects(ProjectFilters(limit=1))
    query_service.get_featured_projects(1)
    query_service.search_projects("solar")
    assert [p.id for p in store.list_projects()] == before
