"""
Authentication Use Cases

Password and OAuth sign-in, and the password reset flow.
"""

from .login_use_case import LoginUseCase
from .oauth_login_use_case import OAuthLoginUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    ConfirmPasswordResetResponse,
    LoginResponse,
    OAuthLoginResponse,
    RequestPasswordResetResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "OAuthLoginUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Responses
    "LoginResponse",
    "OAuthLoginResponse",
    "RequestPasswordResetResponse",
    "ConfirmPasswordResetResponse",
]
