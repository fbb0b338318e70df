# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 注册 / 登录 / 令牌签发与校验

from __future__ import annotations

import re
from datetime import datetime, timezone, timedelta
from typing import Any, Dict, List, Optional, Tuple

import jwt
from jwt import PyJWTError
from passlib.context import CryptContext
from pydantic import ValidationError

from domains.auth_domain import AuthMeta, AuthResponse, LoginRequest, RegisterRequest, TokenClaims
from domains.error_domain import (
    ConflictError,
    InvalidCredentialsError,
    InvalidIssuerError,
    InvalidTokenError,
    NotFoundError,
    RateLimitExceededError,
    TokenExpiredError,
    ValidationAppError,
)
from domains.user_domain import User, UserCreate, UserRole
from infrastructures.store.entity_store import EntityStore
from infrastructures.store.rate_limiter import RateLimiter
from infrastructures.vconfig import VConfig, vconfig
from infrastructures.vlogger import vlogger

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_PASSWORD_RULES = [
    (re.compile(r".{8,}", re.DOTALL), "at least 8 characters"),
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"\d"), "a digit"),
]


def login_attempts_key(client_id: str) -> str:
    return f"login_attempts_{client_id}"


def registration_attempts_key(client_id: str) -> str:
    return f"registration_attempts_{client_id}"


class AuthService:
    def __init__(self, store: EntityStore, rate_limiter: RateLimiter, config: Optional[VConfig] = None) -> None:
        config = config or vconfig
        self._store = store
        self._rate_limiter = rate_limiter

        self._secret_key: str = config.jwt_secret_key
        self._algorithm: str = config.jwt_algorithm
        self._issuer: str = config.jwt_issuer
        self._token_ttl = timedelta(days=int(config.jwt_expire_days))

        self._login_max_attempts = int(config.login_max_attempts)
        self._registration_max_attempts = int(config.registration_max_attempts)

    # =========================
    # Passwords
    # =========================

    @staticmethod
    def hash_password(password: str) -> str:
        return _pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, password_hash: str) -> bool:
        # 占位/未知格式的哈希一律视为不匹配
        if not password_hash or _pwd_context.identify(password_hash) is None:
            return False
        return _pwd_context.verify(plain_password, password_hash)

    @staticmethod
    def password_problems(password: str) -> List[str]:
        return [label for pattern, label in _PASSWORD_RULES if not pattern.search(password)]

    # =========================
    # Tokens
    # =========================

    def issue_token(self, user: User, issued_at: Optional[datetime] = None) -> Tuple[str, datetime]:
        now = issued_at or datetime.now(timezone.utc)
        expire = now + self._token_ttl
        claims: Dict[str, Any] = {
            "sub": str(user.id),
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role.value,
            "iss": self._issuer,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm), expire

    def verify_token(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["exp", "iat", "iss"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidIssuerError as exc:
            raise InvalidIssuerError() from exc
        except jwt.MissingRequiredClaimError as exc:
            if exc.claim == "iss":
                raise InvalidIssuerError() from exc
            raise InvalidTokenError(message=f"Token missing claim: {exc.claim}") from exc
        except PyJWTError as exc:
            raise InvalidTokenError() from exc

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as exc:
            raise InvalidTokenError(message="Malformed token claims") from exc

    def _auth_response(self, user: User) -> AuthResponse:
        token, expire = self.issue_token(user)
        return AuthResponse(token=token, user=user, meta=AuthMeta(token_expiry=expire, user_id=user.id))

    # =========================
    # Flows
    # =========================

    def login(self, payload: LoginRequest, client_id: str) -> AuthResponse:
        key = login_attempts_key(client_id)
        # 先占用一次尝试额度再校验密码，成功后清零
        if not self._rate_limiter.acquire(key, self._login_max_attempts):
            vlogger.warning("login rate limited client=%s", client_id)
            raise RateLimitExceededError(message="Too many login attempts. Please try again later.")

        user = self._store.get_user_by_email(str(payload.email))
        if user is None or not self.verify_password(payload.password, user.password_hash):
            vlogger.warning("login failed client=%s attempts=%s", client_id, self._rate_limiter.get_count(key))
            raise InvalidCredentialsError()

        self._rate_limiter.reset(key)
        vlogger.info("login ok user_id=%s", user.id)
        return self._auth_response(user)

    def register(self, payload: RegisterRequest, client_id: str) -> AuthResponse:
        problems = self.password_problems(payload.password)
        if problems:
            raise ValidationAppError(
                message="Password must contain " + ", ".join(problems),
                details=[{"field": "password", "missing": problems}],
            )

        key = registration_attempts_key(client_id)
        if not self._rate_limiter.acquire(key, self._registration_max_attempts):
            vlogger.warning("registration rate limited client=%s", client_id)
            raise RateLimitExceededError(message="Too many registration attempts. Please try again later.")

        email = str(payload.email)
        if self._store.get_user_by_email(email) is not None:
            raise ConflictError(message="User already exists", code="USER_EXISTS")

        password_hash = self.hash_password(payload.password)
        user = self._store.create_user_with_password(
            UserCreate(
                name=payload.name,
                email=email,
                bio=payload.bio,
                profile_image_url=payload.profile_image_url,
                role=UserRole.user,
            ),
            password_hash,
        )
        vlogger.info("user registered user_id=%s", user.id)
        return self._auth_response(user)

    def get_current_user(self, claims: TokenClaims) -> User:
        user = self._store.get_user(claims.id)
        if user is None:
            raise NotFoundError(message="User not found")
        return user
