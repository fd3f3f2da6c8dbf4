"""Subject routes."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from core.dependencies import SubjectManagerDep
from core.exceptions import InvalidIdentifierError, SubjectNotFoundError
from schemas.common import CreatedId, DataResponse, PaginatedResponse
from schemas.details import SubjectDetails
from schemas.subject import CreateSubjectRequest, SubjectWithDepartment
from utils.identifiers import parse_numeric_id
from utils.pagination import PageParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/subjects", tags=["Subject"])

# Returned for any failed create, including bodies that do not validate
CREATE_FAILURE_MESSAGE = "Failed to create subject"


@router.get(
    "", response_model=PaginatedResponse[SubjectWithDepartment], summary="List subjects"
)
def list_subjects(
    subject_manager: SubjectManagerDep,
    search: Optional[str] = None,
    department: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> PaginatedResponse[SubjectWithDepartment]:
    """List subjects, optionally filtered by name/code and department name."""
    try:
        subjects, pagination = subject_manager.list_subjects(
            PageParams.from_query(page, limit), search=search, department=department
        )
    except SQLAlchemyError:
        logger.exception("GET /api/subjects failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch subjects",
        )
    return PaginatedResponse[SubjectWithDepartment](data=subjects, pagination=pagination)


@router.post(
    "",
    response_model=DataResponse[CreatedId],
    status_code=status.HTTP_201_CREATED,
    summary="Create a subject",
)
def create_subject(
    req: CreateSubjectRequest,
    subject_manager: SubjectManagerDep,
) -> DataResponse[CreatedId]:
    try:
        subject_id = subject_manager.create_subject(
            department_id=req.department_id,
            name=req.name,
            code=req.code,
            description=req.description,
        )
    except SQLAlchemyError:
        logger.exception("POST /api/subjects failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=CREATE_FAILURE_MESSAGE,
        )
    return DataResponse[CreatedId](data=CreatedId(id=subject_id))


@router.get(
    "/{subject_id}",
    response_model=DataResponse[SubjectDetails],
    summary="Get subject details",
)
def get_subject_details(
    subject_id: str,
    subject_manager: SubjectManagerDep,
) -> DataResponse[SubjectDetails]:
    try:
        details = subject_manager.get_subject_details(
            parse_numeric_id(subject_id, "subject")
        )
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SubjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError:
        logger.exception("GET /api/subjects/%s failed", subject_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch subject details",
        )
    return DataResponse[SubjectDetails](data=details)
