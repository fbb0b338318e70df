# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from starlette.concurrency import run_in_threadpool

from app.deps import get_auth_service, get_client_id, get_current_user
from domains.auth_domain import AuthResponse, LoginRequest, RegisterRequest
from domains.user_domain import User
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
        body: RegisterRequest,
        auth_service: Annotated[AuthService, Depends(get_auth_service)],
        client_id: Annotated[str, Depends(get_client_id)],
) -> AuthResponse:
    # 哈希计算较慢，放到线程池，避免阻塞事件循环
    return await run_in_threadpool(auth_service.register, body, client_id)


@router.post("/login", response_model=AuthResponse)
async def login(
        body: LoginRequest,
        auth_service: Annotated[AuthService, Depends(get_auth_service)],
        client_id: Annotated[str, Depends(get_client_id)],
) -> AuthResponse:
    return await run_in_threadpool(auth_service.login, body, client_id)


@router.get("/me", response_model=User)
async def get_me(
        current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    return current_user
