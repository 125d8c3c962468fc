import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError, raise_for_error
from src.app.services.email_sender import IEmailSender
from src.app.services.oauth_client import IOAuthClient, OAuthExchangeError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts import (
    AccountProfile,
    GetProfileUseCase,
    ProvisionAccountCommand,
    ProvisionAccountUseCase,
)
from src.app.use_cases.auth import (
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    LoginResponse,
    LoginUseCase,
    OAuthLoginUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
)
from src.depends import (
    ClientInfo,
    get_client_info,
    get_current_account,
    get_email_sender,
    get_oauth_client,
    get_unit_of_work,
)
from src.domain.entities import OAuthProvider
from src.domain.errors import ErrorCode
from src.domain.policy import ActorContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Either email or login_id identifies the account.
    """

    email: Optional[str] = Field(None, description="Email address (or login ID)")
    login_id: Optional[str] = Field(None, description="Login ID")
    password: str = Field(..., description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    client: ClientInfo = Depends(get_client_info),
):
    """
    Password Login

    Raises:
        - 400 Bad Request: Missing identifier or password
        - 401 Unauthorized: Invalid credentials, or account inactive
        - 500 Internal Server Error: Signing secret not configured
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(
        request.password,
        email=request.email,
        login_id=request.login_id,
        ip=client.ip,
        user_agent=client.user_agent,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RegisterRequest(BaseModel):
    """Provision clinic account payload"""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., description="Clinic account email address")
    password: str = Field(..., description="Initial password (min 6 chars)")
    login_id: Optional[str] = Field(None, max_length=255, description="Defaults to email")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AccountProfile)
async def register(
    request: RegisterRequest,
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Provision Clinic Account

    System administrators create clinic accounts; the account must change
    its password on first login.

    Raises:
        - 400 Bad Request: Password too short
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: Caller is not a system administrator
        - 409 Conflict: Email or login ID already in use
    """
    command = ProvisionAccountCommand(
        name=request.name,
        email=request.email,
        password=request.password,
        login_id=request.login_id,
    )
    result = await ProvisionAccountUseCase(uow).execute(actor, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    response_model_exclude_none=True,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Request Password Reset

    Always answers the same way for unknown emails.

    Raises:
        - 503 Service Unavailable: Reset email could not be delivered
    """
    use_case = RequestPasswordResetUseCase(uow, email_sender)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., description="New password (min 6 chars)")


@router.put(
    "/reset-password/{token}",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Confirm Password Reset

    Raises:
        - 400 Bad Request: Invalid or expired token, or password too short
    """
    result = await ConfirmPasswordResetUseCase(uow).execute(token, request.password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AccountProfile)
async def get_me(
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Current account profile"""
    result = await GetProfileUseCase(uow).execute(actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


def _require_configured(oauth_client: IOAuthClient, provider: OAuthProvider) -> None:
    if not oauth_client.is_configured(provider):
        raise ClientError(
            Error(
                ErrorCode.OAUTH_NOT_CONFIGURED,
                f"{provider.value.capitalize()} login is not configured",
            ),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )


OAUTH_STATE_COOKIE = "oauth_state"
OAUTH_STATE_MAX_AGE_SECONDS = 600


def _frontend_redirect(path: str, provider: OAuthProvider) -> RedirectResponse:
    frontend = ApplicationConfig.FRONTEND_URL.rstrip("/")
    response = RedirectResponse(f"{frontend}{path}", status_code=status.HTTP_302_FOUND)
    response.delete_cookie(OAUTH_STATE_COOKIE, path=f"/auth/{provider.value}")
    return response


@router.get("/{provider}")
async def oauth_start(
    provider: OAuthProvider,
    oauth_client: IOAuthClient = Depends(get_oauth_client),
):
    """
    Start OAuth Login

    Redirects to the provider consent page. The generated state is bound to
    the browser through a short-lived HttpOnly cookie scoped to this
    provider's routes.

    Raises:
        - 503 Service Unavailable: Provider credentials not configured
    """
    _require_configured(oauth_client, provider)
    state = secrets.token_urlsafe(16)
    response = RedirectResponse(
        oauth_client.authorization_url(provider, state),
        status_code=status.HTTP_302_FOUND,
    )
    response.set_cookie(
        OAUTH_STATE_COOKIE,
        state,
        max_age=OAUTH_STATE_MAX_AGE_SECONDS,
        path=f"/auth/{provider.value}",
        httponly=True,
        samesite="lax",
        secure=ApplicationConfig.BACKEND_URL.startswith("https://"),
    )
    return response


@router.get("/{provider}/callback")
async def oauth_callback(
    provider: OAuthProvider,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    oauth_state: Optional[str] = Cookie(default=None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    oauth_client: IOAuthClient = Depends(get_oauth_client),
):
    """
    OAuth Callback

    Checks the state against the cookie set by the start route, exchanges
    the code, signs in (linking or creating the account) and redirects to the
    frontend with the session token. Every failure redirects to the frontend
    login page.
    """
    if not oauth_client.is_configured(provider):
        logger.warning(f"OAuth {provider.value} callback while not configured")
        return _frontend_redirect("/login?error=oauth_not_configured", provider)

    failure = _frontend_redirect("/login?error=oauth_failed", provider)

    if not state or not oauth_state or not secrets.compare_digest(
        state.encode(), oauth_state.encode()
    ):
        logger.warning(f"OAuth {provider.value} callback with missing or mismatched state")
        return failure

    if error or not code:
        logger.warning(f"OAuth {provider.value} callback without code: {error}")
        return failure

    try:
        profile = await oauth_client.fetch_profile(provider, code)
    except OAuthExchangeError as exc:
        logger.warning(f"OAuth {provider.value} exchange failed: {exc}")
        return failure

    result = await OAuthLoginUseCase(uow).execute(profile)
    if result.is_err():
        logger.warning(f"OAuth {provider.value} login refused: {result.error.code}")
        return failure

    return _frontend_redirect(f"/auth/callback?token={result.value.token}", provider)
