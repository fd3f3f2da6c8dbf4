"""Class management routes."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from core.dependencies import ClassManagerDep
from core.exceptions import ClassNotFoundError, InvalidIdentifierError
from schemas.class_schema import ClassWithSubjectAndTeacher, CreateClassRequest
from schemas.common import CreatedId, DataResponse, PaginatedResponse
from schemas.details import ClassDetails
from utils.identifiers import parse_numeric_id
from utils.pagination import PageParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/classes", tags=["Class"])

# Returned for any failed create, including bodies that do not validate
CREATE_FAILURE_MESSAGE = "Failed to create class"


@router.get(
    "", response_model=PaginatedResponse[ClassWithSubjectAndTeacher], summary="List classes"
)
def list_classes(
    class_manager: ClassManagerDep,
    search: Optional[str] = None,
    subject: Optional[str] = None,
    teacher: Optional[str] = None,
    status_filter: Optional[str] = Query(default=None, alias="status"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> PaginatedResponse[ClassWithSubjectAndTeacher]:
    """List classes.

    Args:
        class_manager: Injected ClassManager instance.
        search: Substring of the class name or invite code.
        subject: Substring of the subject name.
        teacher: Substring of the teacher name.
        status_filter: Exact class status, passed as ``?status=``.
        page: Page number, clamped to at least 1.
        limit: Page size, clamped to at least 1.

    Returns:
        One page of classes with their subject and teacher.
    """
    try:
        classes, pagination = class_manager.list_classes(
            PageParams.from_query(page, limit),
            search=search,
            subject=subject,
            teacher=teacher,
            status=status_filter,
        )
    except SQLAlchemyError:
        logger.exception("GET /api/classes failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch classes",
        )
    return PaginatedResponse[ClassWithSubjectAndTeacher](data=classes, pagination=pagination)


@router.post(
    "",
    response_model=DataResponse[CreatedId],
    status_code=status.HTTP_201_CREATED,
    summary="Create a class",
)
def create_class(
    req: CreateClassRequest,
    class_manager: ClassManagerDep,
) -> DataResponse[CreatedId]:
    """Create a class. The invite code is generated and schedules start empty."""
    try:
        class_id = class_manager.create_class(
            name=req.name,
            teacher_id=req.teacher_id,
            subject_id=req.subject_id,
            capacity=req.capacity,
            description=req.description,
            status=req.status.value if req.status else None,
            banner_url=req.banner_url,
            banner_cld_pub_id=req.banner_cld_pub_id,
        )
    except SQLAlchemyError:
        logger.exception("POST /api/classes failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=CREATE_FAILURE_MESSAGE,
        )
    return DataResponse[CreatedId](data=CreatedId(id=class_id))


@router.get(
    "/{class_id}",
    response_model=DataResponse[ClassDetails],
    summary="Get class details",
)
def get_class_details(
    class_id: str,
    class_manager: ClassManagerDep,
) -> DataResponse[ClassDetails]:
    try:
        details = class_manager.get_class_details(parse_numeric_id(class_id, "class"))
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ClassNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError:
        logger.exception("GET /api/classes/%s failed", class_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch class details",
        )
    return DataResponse[ClassDetails](data=details)
