"""
Authentication routes.
POST /auth/register, /auth/login, /auth/logout, /auth/verification-email, /auth/verify-email
"""
from fastapi import APIRouter, Request, status

from invoicedesk.core.config import settings
from invoicedesk.core.dependencies import CurrentUser, DBSession, TokenPayload
from invoicedesk.core.exceptions import UnauthorizedException
from invoicedesk.core.limiter import limiter
from invoicedesk.schemas.user import (
    LoginRequest,
    RegisterResponse,
    Token,
    UserRead,
    UserRegister,
    VerificationEmailRequest,
    VerifyEmailRequest,
    VerifyEmailResponse,
)
from invoicedesk.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def register(
    user_in: UserRegister,
    db: DBSession,
) -> RegisterResponse:
    user, needs_verification = await auth_service.register_user(db, user_in=user_in)
    return RegisterResponse(
        user=UserRead.model_validate(user), needs_verification=needs_verification
    )


@router.post(
    "/login",
    response_model=Token,
    summary="Authenticate and receive an access token",
)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: DBSession,
) -> Token:
    user = await auth_service.authenticate(
        db, email=credentials.email, password=credentials.password
    )
    if user is None:
        raise UnauthorizedException("Invalid email or password")
    return auth_service.issue_token(user)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke the current access token",
)
async def logout(
    current_user: CurrentUser,
    payload: TokenPayload,
    db: DBSession,
) -> None:
    auth_service.logout(db, user=current_user, token_id=payload.get("jti"))


@router.post(
    "/verification-email",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Send an e-mail verification link",
)
async def send_verification_email(body: VerificationEmailRequest) -> dict[str, bool]:
    sent = await auth_service.send_verification_email(body.email)
    return {"sent": sent}


@router.post(
    "/verify-email",
    response_model=VerifyEmailResponse,
    summary="Confirm an e-mail address with its verification token",
)
async def verify_email(
    body: VerifyEmailRequest,
    db: DBSession,
) -> VerifyEmailResponse:
    verified = await auth_service.verify_email(db, user_id=body.user_id, token=body.token)
    return VerifyEmailResponse(verified=verified)
