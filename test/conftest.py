# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 公共测试夹具（内存仓储 / 可控时钟 / TestClient）

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from infrastructures.store.entity_store import EntityStore
from infrastructures.store.rate_limiter import RateLimiter
from infrastructures.store.seed_data import seed_store
from infrastructures.vconfig import VConfig, vconfig
from services.auth_service import AuthService
from services.project_query_service import ProjectQueryService

SEED_PASSWORD = "Kalluba2025"


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> VConfig:
    return vconfig.model_copy(
        update={
            "app_env": "dev",
            "log_requests": False,
            "seed_data": True,
            "seed_user_password": SEED_PASSWORD,
        }
    )


@pytest.fixture
def store() -> EntityStore:
    s = EntityStore()
    seed_store(s, AuthService.hash_password, SEED_PASSWORD)
    return s


@pytest.fixture
def rate_limiter(clock: FakeClock, config: VConfig) -> RateLimiter:
    return RateLimiter(window_seconds=config.rate_limit_window_seconds, clock=clock)


@pytest.fixture
def auth_service(store: EntityStore, rate_limiter: RateLimiter, config: VConfig) -> AuthService:
    return AuthService(store, rate_limiter, config)


@pytest.fixture
def query_service(store: EntityStore) -> ProjectQueryService:
    return ProjectQueryService(store)


@pytest.fixture
def client(config: VConfig, store: EntityStore, rate_limiter: RateLimiter) -> TestClient:
    app = create_app(config=config, store=store, rate_limiter=rate_limiter)
    with TestClient(app) as c:
        yield c
