"""User routes.

This module handles HTTP endpoints for listing users and reading the
role-dependent user details. Users are created by the auth provider.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from core.dependencies import UserManagerDep
from core.exceptions import UserNotFoundError
from schemas.common import DataResponse, PaginatedResponse
from schemas.details import AnyUserDetails
from schemas.user import UserInfo
from utils.pagination import PageParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["User"])


@router.get("", response_model=PaginatedResponse[UserInfo], summary="List users")
def list_users(
    user_manager: UserManagerDep,
    search: Optional[str] = None,
    role: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> PaginatedResponse[UserInfo]:
    """List users matching an optional search and role.

    Args:
        user_manager: Injected UserManager instance.
        search: Substring of the name or email.
        role: Exact role.
        page: Page number, clamped to at least 1.
        limit: Page size, clamped to at least 1.

    Returns:
        One page of users with pagination metadata.
    """
    try:
        users, pagination = user_manager.list_users(
            PageParams.from_query(page, limit), search=search, role=role
        )
    except SQLAlchemyError:
        logger.exception("GET /api/users failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch users",
        )
    return PaginatedResponse[UserInfo](data=users, pagination=pagination)


@router.get(
    "/{user_id}",
    response_model=DataResponse[AnyUserDetails],
    summary="Get user details",
)
def get_user_details(
    user_id: str,
    user_manager: UserManagerDep,
) -> DataResponse[AnyUserDetails]:
    """Get a user with the aggregate matching their role.

    Teachers carry ``classes``, ``subjects`` and ``departments``; students
    carry ``enrollments``, ``classes`` and ``subjects``; any other role
    carries only ``user``.

    Raises:
        HTTPException: 404 if the user does not exist.
    """
    try:
        details = user_manager.get_user_details(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError:
        logger.exception("GET /api/users/%s failed", user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user details",
        )
    return DataResponse[AnyUserDetails](data=details)
