# -*- coding: utf-8 -*-

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from domains.auth_domain import TokenClaims
from domains.error_domain import AuthTokenMissingError
from domains.user_domain import User
from infrastructures.store.entity_store import EntityStore
from services.auth_service import AuthService
from services.project_query_service import ProjectQueryService
from services.project_service import ProjectService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_query_service(request: Request) -> ProjectQueryService:
    return request.app.state.query_service


def get_project_service(request: Request) -> ProjectService:
    return request.app.state.project_service


def get_client_id(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def get_current_claims(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenClaims:
    if token is None or token.strip() == "":
        raise AuthTokenMissingError()

    claims = auth_service.verify_token(token.strip())
    request.state.auth_claims = claims
    return claims


async def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    return auth_service.get_current_user(claims)
