from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from servicedesk_auth.api.error import to_http_error
from servicedesk_auth.api.utils.rate_limit import (
    EMAIL_VERIFICATION_LIMIT,
    LOGIN_CODE_LIMIT,
    LOGIN_LIMIT,
    PASSWORD_RESET_LIMIT,
    REGISTER_LIMIT,
    limiter,
)
from servicedesk_auth.app.services.notification_gateway import INotificationGateway
from servicedesk_auth.app.services.session_issuer import PublicUser
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from servicedesk_auth.app.use_cases.auth import (
    RegisterCommand,
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    SendEmailVerificationUseCase,
    VerifyEmailUseCase,
    SendLoginCodeUseCase,
    VerifyLoginCodeUseCase,
    CompleteProfileUseCase,
    OAuthLoginUseCase,
    LinkOAuthAccountUseCase,
    OnboardingCommand,
    OAuthProfile,
    MessageResponse,
    LoginResponse,
    CompleteProfileResponse,
    LinkedAccountResponse,
)
from servicedesk_auth.app.use_cases.sessions import LogoutUseCase, RevokedSessionsResponse
from servicedesk_auth.depends import (
    get_current_user,
    get_notification_gateway,
    get_unit_of_work,
)
from servicedesk_auth.domain.principal import AuthenticatedPrincipal

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    firstname: str = Field("", max_length=100)
    lastname: str = Field("", max_length=100)


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=PublicUser)
@limiter.limit(REGISTER_LIMIT)
async def register(
    request: Request,
    body: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifications: INotificationGateway = Depends(get_notification_gateway),
):
    """
    Register a password account.

    Raises:
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 429 Too Many Requests: Rate limit exceeded
    """
    command = RegisterCommand(
        email=body.email,
        password=body.password,
        firstname=body.firstname,
        lastname=body.lastname,
    )

    result = await RegisterUseCase(uow, notifications).execute(command)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Authenticate with email and password.

    Returns an access token and a refresh token. Each login opens a new
    session; sessions on other devices stay valid.

    Raises:
        - 401 Unauthorized: Invalid credentials or disabled account
        - 429 Too Many Requests: Rate limit exceeded
    """
    result = await LoginUseCase(uow).execute(body.email, body.password)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def refresh(request: RefreshRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Rotate a refresh token.

    The presented token is consumed and a new pair is returned, built from
    the current user state.

    Raises:
        - 400 Bad Request: Invalid, expired or already used refresh token
        - 404 Not Found: Token owner no longer exists
    """
    result = await RefreshTokenUseCase(uow).execute(request.refresh_token)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


class EmailRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/forgot-password", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
@limiter.limit(PASSWORD_RESET_LIMIT)
async def forgot_password(
    request: Request,
    body: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifications: INotificationGateway = Depends(get_notification_gateway),
):
    """
    Email a password reset link valid for 1 hour.

    Raises:
        - 404 Not Found: No user with this email
        - 400 Bad Request: Email could not be sent
        - 429 Too Many Requests: Rate limit exceeded
    """
    result = await RequestPasswordResetUseCase(uow, notifications).execute(body.email)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., description="Password reset token from email")
    new_password: str = Field(..., description="New password (min 8 chars)")


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifications: INotificationGateway = Depends(get_notification_gateway),
):
    """
    Set a new password using a reset token. The token is single-use.

    Raises:
        - 400 Bad Request: Invalid/expired token or weak password
        - 404 Not Found: User no longer exists
    """
    result = await ConfirmPasswordResetUseCase(uow, notifications).execute(
        request.token, request.new_password
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post(
    "/send-verification", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
@limiter.limit(EMAIL_VERIFICATION_LIMIT)
async def send_verification(
    request: Request,
    body: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifications: INotificationGateway = Depends(get_notification_gateway),
):
    """
    Email a verification link valid for 24 hours.

    Raises:
        - 404 Not Found: No user with this email
        - 400 Bad Request: Already verified, or email could not be sent
        - 429 Too Many Requests: Rate limit exceeded
    """
    result = await SendEmailVerificationUseCase(uow, notifications).execute(body.email)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., description="Verification token from email")


@router.post("/verify-email", status_code=status.HTTP_200_OK, response_model=MessageResponse)
@limiter.limit(EMAIL_VERIFICATION_LIMIT)
async def verify_email(
    request: Request,
    body: VerifyEmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifications: INotificationGateway = Depends(get_notification_gateway),
):
    """
    Verify an email address.

    Raises:
        - 400 Bad Request: Invalid, expired or already used token
        - 404 Not Found: User not found
        - 429 Too Many Requests: Rate limit exceeded
    """
    result = await VerifyEmailUseCase(uow, notifications).execute(body.token)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post(
    "/send-login-code", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
@limiter.limit(LOGIN_CODE_LIMIT)
async def send_login_code(
    request: Request,
    body: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifications: INotificationGateway = Depends(get_notification_gateway),
):
    """
    Email a 6-digit sign-in code valid for 10 minutes.

    Raises:
        - 404 Not Found: No user with this email
        - 429 Too Many Requests: Rate limit exceeded
    """
    result = await SendLoginCodeUseCase(uow, notifications).execute(body.email)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


class VerifyLoginCodeRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    code: str = Field(..., min_length=6, max_length=6, description="6-digit code")


@router.post(
    "/verify-login-code", status_code=status.HTTP_200_OK, response_model=LoginResponse
)
@limiter.limit(LOGIN_CODE_LIMIT)
async def verify_login_code(
    request: Request,
    body: VerifyLoginCodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Exchange a login code for a session.

    Raises:
        - 400 Bad Request: Wrong, expired or exhausted code
        - 404 Not Found: No user with this email
        - 429 Too Many Requests: Rate limit exceeded
    """
    result = await VerifyLoginCodeUseCase(uow).execute(body.email, body.code)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post(
    "/complete-profile",
    status_code=status.HTTP_200_OK,
    response_model=CompleteProfileResponse,
)
async def complete_profile(
    request: OnboardingCommand,
    current_user: AuthenticatedPrincipal = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifications: INotificationGateway = Depends(get_notification_gateway),
):
    """
    Store onboarding data for the signed-in user.

    Raises:
        - 401 Unauthorized: Missing or invalid access token
        - 404 Not Found: User not found
    """
    result = await CompleteProfileUseCase(uow, notifications).execute(
        current_user.user_id, request
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=RevokedSessionsResponse)
async def logout(
    current_user: AuthenticatedPrincipal = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Sign out of every device.

    Raises:
        - 401 Unauthorized: Missing or invalid access token
    """
    result = await LogoutUseCase(uow).execute(current_user.user_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AuthenticatedPrincipal)
async def me(current_user: AuthenticatedPrincipal = Depends(get_current_user)):
    """Return the identity carried by the access token"""
    return current_user


@router.post(
    "/oauth/{provider}/callback",
    status_code=status.HTTP_200_OK,
    response_model=LoginResponse,
)
async def oauth_callback(
    provider: str,
    profile: OAuthProfile,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Sign in with a provider profile already exchanged by the frontend.

    Links the identity to an existing user with the same email, or creates a
    new user, then opens a session tagged with the provider.
    """
    result = await OAuthLoginUseCase(uow).execute(provider, profile)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post(
    "/oauth/{provider}/link",
    status_code=status.HTTP_201_CREATED,
    response_model=LinkedAccountResponse,
)
async def link_oauth_account(
    provider: str,
    profile: OAuthProfile,
    current_user: AuthenticatedPrincipal = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Link a provider identity to the signed-in user.

    Raises:
        - 401 Unauthorized: Missing or invalid access token
        - 404 Not Found: User not found
        - 409 Conflict: Identity linked elsewhere, or provider already linked
    """
    result = await LinkOAuthAccountUseCase(uow).execute(
        current_user.user_id, provider, profile
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
