"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
"""

from typing import Optional

from pydantic import BaseModel

from src.app.use_cases.accounts.dtos import AccountProfile


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """Response for login use case"""

    token: str
    user: AccountProfile


class OAuthLoginResponse(BaseModel):
    """Response for OAuth login; outcome is authenticated, linked or created"""

    token: str
    user: AccountProfile
    outcome: str


class RequestPasswordResetResponse(BaseModel):
    """
    Response for request password reset use case.

    reset_token and reset_url are only populated when mail delivery failed
    and EXPOSE_RESET_TOKEN_ON_EMAIL_FAILURE is enabled.
    """

    status: str
    message: str
    reset_token: Optional[str] = None
    reset_url: Optional[str] = None


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset; token is absent for inactive accounts"""

    status: str
    message: str
    token: Optional[str] = None
    user: AccountProfile
