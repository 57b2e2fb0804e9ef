"""
User profile routes.
GET/PUT /users/me, admin CRUD on /users/
"""
from __future__ import annotations

from fastapi import APIRouter, Query, status

from invoicedesk.core.dependencies import AdminUser, CurrentUser, DBSession
from invoicedesk.core.exceptions import NotFoundException
from invoicedesk.schemas.pagination import PaginatedResponse
from invoicedesk.schemas.user import UserAdminUpdate, UserCreate, UserRead, UserUpdate
from invoicedesk.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserRead, summary="Get current user profile")
async def get_me(current_user: CurrentUser) -> UserRead:
    return UserRead.model_validate(current_user)


@router.put("/me", response_model=UserRead, summary="Update current user profile")
async def update_me(
    user_in: UserUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> UserRead:
    updated = user_service.update_user(db, user_id=current_user.id, user_in=user_in)
    return UserRead.model_validate(updated)


@router.get(
    "/",
    response_model=PaginatedResponse[UserRead],
    summary="List all users (admin only)",
)
async def list_users(
    _admin: AdminUser,
    db: DBSession,
    page: int = Query(default=1, ge=1),
    size: int = Query(default=20, ge=1, le=100),
    search: str | None = Query(default=None, max_length=200),
) -> PaginatedResponse[UserRead]:
    return PaginatedResponse[UserRead].paginate(
        db.users.search(search),
        page=page,
        size=size,
        transform=UserRead.model_validate,
    )


@router.post(
    "/",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user (admin only)",
)
async def create_user(
    user_in: UserCreate,
    _admin: AdminUser,
    db: DBSession,
) -> UserRead:
    user = user_service.create_user(db, user_in=user_in)
    return UserRead.model_validate(user)


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get user by ID (admin only)",
)
async def get_user(
    user_id: str,
    _admin: AdminUser,
    db: DBSession,
) -> UserRead:
    user = db.users.get(user_id)
    if user is None:
        raise NotFoundException("User", user_id)
    return UserRead.model_validate(user)


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Update any user field, including role and plan (admin only)",
)
async def admin_update_user(
    user_id: str,
    user_in: UserAdminUpdate,
    _admin: AdminUser,
    db: DBSession,
) -> UserRead:
    updated = user_service.update_user(db, user_id=user_id, user_in=user_in)
    return UserRead.model_validate(updated)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user and their invoices (admin only)",
)
async def delete_user(
    user_id: str,
    admin: AdminUser,
    db: DBSession,
) -> None:
    user_service.delete_user(db, user_id=user_id, acting_user=admin)
