"""
Authentication service.
Handles login, registration and e-mail verification against the user store.
Business logic lives here; routes only call these methods.

Every operation here waits SIMULATED_LATENCY_SECONDS before touching the
store to model a remote identity provider. The store work after the wait
never suspends, so check-then-insert sequences cannot interleave.
"""
from __future__ import annotations

import asyncio
import logging

from invoicedesk.core.config import settings
from invoicedesk.core.exceptions import DuplicateEmailException, DuplicateUsernameException
from invoicedesk.core.security import create_access_token, verify_email_token, verify_password
from invoicedesk.db.session import InMemoryDatabase
from invoicedesk.models.user import User
from invoicedesk.schemas.user import Token, UserRead, UserRegister

logger = logging.getLogger(__name__)


async def simulate_latency() -> None:
    delay = settings.SIMULATED_LATENCY_SECONDS
    if delay > 0:
        await asyncio.sleep(delay)


class AuthService:

    async def authenticate(
        self, db: InMemoryDatabase, *, email: str, password: str
    ) -> User | None:
        """
        Match the user by exact email and check the password.
        Returns None on any mismatch; there is no lockout.
        """
        await simulate_latency()

        user = db.users.get_by_email(email)
        if user is None or not verify_password(password):
            logger.info("Failed login attempt for %s", email)
            return None

        logger.info("User %s logged in", user.id)
        return user

    async def register_user(
        self, db: InMemoryDatabase, *, user_in: UserRegister
    ) -> tuple[User, bool]:
        """
        Register a new unverified user with the default role and plan.
        Returns the user and whether e-mail verification is still needed.
        """
        await simulate_latency()

        if db.users.exists(email=user_in.email):
            raise DuplicateEmailException()
        if db.users.exists(username=user_in.username):
            raise DuplicateUsernameException()

        user = db.users.create(
            obj_in=user_in.model_dump(exclude={"password"}),
            role="user",
            subscription_plan="Free Plan",
            is_email_verified=False,
        )
        logger.info("Registered user %s (%s)", user.id, user.email)
        return user, True

    async def send_verification_email(self, email: str) -> bool:
        """Pretend to deliver a verification e-mail. Always succeeds."""
        await simulate_latency()
        logger.info("Verification email sent to: %s", email)
        return True

    async def verify_email(
        self, db: InMemoryDatabase, *, user_id: str, token: str
    ) -> bool:
        await simulate_latency()

        user = db.users.get(user_id)
        if user is None or not verify_email_token(token):
            logger.info("Email verification failed for user %s", user_id)
            return False

        db.users.update(user.id, obj_in={"is_email_verified": True})
        logger.info("Email verified for user %s", user_id)
        return True

    def issue_token(self, user: User) -> Token:
        return Token(
            access_token=create_access_token(user.id, user.role),
            user=UserRead.model_validate(user),
        )

    def logout(self, db: InMemoryDatabase, *, user: User, token_id: str | None) -> None:
        """Revoke the access token the request was made with."""
        if token_id:
            db.revoked_tokens.add(token_id)
        logger.info("User %s logged out", user.id)


auth_service = AuthService()
