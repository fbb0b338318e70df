# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 统一错误模型，路由边界统一转换为 {code, message, details}
from typing import Optional, Any

from pydantic import BaseModel
from starlette import status


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None


class AppError(Exception):
    def __init__(
            self,
            code: str,
            message: str,
            http_status: int = status.HTTP_400_BAD_REQUEST,
            details: Any | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.details = details
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(code=self.code, message=self.message, details=self.details)


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found", details: Any | None = None):
        super().__init__(
            code="NOT_FOUND",
            message=message,
            http_status=status.HTTP_404_NOT_FOUND,
            details=details,
        )


class PermissionDeniedError(AppError):
    def __init__(self, message: str = "Permission denied", details: Any | None = None):
        super().__init__(
            code="PERMISSION_DENIED",
            message=message,
            http_status=status.HTTP_403_FORBIDDEN,
            details=details,
        )


class ValidationAppError(AppError):
    def __init__(self, message: str = "Validation error", details: Any | None = None):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            http_status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )


class ConflictError(AppError):
    def __init__(self, message: str = "Resource already exists", code: str = "CONFLICT", details: Any | None = None):
        super().__init__(
            code=code,
            message=message,
            http_status=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class InvalidCredentialsError(AppError):
    # 不区分“邮箱不存在”与“密码错误”
    def __init__(self) -> None:
        super().__init__(
            code="INVALID_CREDENTIALS",
            message="Invalid credentials",
            http_status=status.HTTP_401_UNAUTHORIZED,
        )


class RateLimitExceededError(AppError):
    def __init__(self, message: str = "Too many attempts. Please try again later.", details: Any | None = None):
        super().__init__(
            code="RATE_LIMIT_EXCEEDED",
            message=message,
            http_status=status.HTTP_429_TOO_MANY_REQUESTS,
            details=details,
        )


class AuthTokenMissingError(AppError):
    def __init__(self) -> None:
        super().__init__(
            code="AUTH_TOKEN_MISSING",
            message="No token provided",
            http_status=status.HTTP_401_UNAUTHORIZED,
        )


class InvalidTokenError(AppError):
    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(
            code="INVALID_TOKEN",
            message=message,
            http_status=status.HTTP_401_UNAUTHORIZED,
        )


class TokenExpiredError(AppError):
    def __init__(self) -> None:
        super().__init__(
            code="TOKEN_EXPIRED",
            message="Token expired",
            http_status=status.HTTP_401_UNAUTHORIZED,
        )


class InvalidIssuerError(AppError):
    def __init__(self) -> None:
        super().__init__(
            code="INVALID_ISSUER",
            message="Invalid token issuer",
            http_status=status.HTTP_401_UNAUTHORIZED,
        )


class ServerError(AppError):
    def __init__(self, message: str = "Internal server error", details: Any | None = None):
        super().__init__(
            code="SERVER_ERROR",
            message=message,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )
