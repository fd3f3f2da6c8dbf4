"""Department routes."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from core.dependencies import DepartmentManagerDep
from core.exceptions import DepartmentNotFoundError, InvalidIdentifierError
from schemas.common import CreatedId, DataResponse, PaginatedResponse
from schemas.department import CreateDepartmentRequest, DepartmentListItem
from schemas.details import DepartmentDetails
from utils.identifiers import parse_numeric_id
from utils.pagination import PageParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/departments", tags=["Department"])

# Returned for any failed create, including bodies that do not validate
CREATE_FAILURE_MESSAGE = "Failed to create department"


@router.get(
    "", response_model=PaginatedResponse[DepartmentListItem], summary="List departments"
)
def list_departments(
    department_manager: DepartmentManagerDep,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> PaginatedResponse[DepartmentListItem]:
    try:
        departments, pagination = department_manager.list_departments(
            PageParams.from_query(page, limit), search=search
        )
    except SQLAlchemyError:
        logger.exception("GET /api/departments failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch departments",
        )
    return PaginatedResponse[DepartmentListItem](data=departments, pagination=pagination)


@router.post(
    "",
    response_model=DataResponse[CreatedId],
    status_code=status.HTTP_201_CREATED,
    summary="Create a department",
)
def create_department(
    req: CreateDepartmentRequest,
    department_manager: DepartmentManagerDep,
) -> DataResponse[CreatedId]:
    try:
        department_id = department_manager.create_department(
            code=req.code, name=req.name, description=req.description
        )
    except SQLAlchemyError:
        logger.exception("POST /api/departments failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=CREATE_FAILURE_MESSAGE,
        )
    return DataResponse[CreatedId](data=CreatedId(id=department_id))


@router.get(
    "/{department_id}",
    response_model=DataResponse[DepartmentDetails],
    summary="Get department details",
)
def get_department_details(
    department_id: str,
    department_manager: DepartmentManagerDep,
) -> DataResponse[DepartmentDetails]:
    """Get a department with its subjects, classes and enrolled students.

    Args:
        department_id: Numeric department id from the path.
        department_manager: Injected DepartmentManager instance.

    Returns:
        The composite department details.

    Raises:
        HTTPException: 400 if the id is not numeric, 404 if the department
            does not exist.
    """
    try:
        details = department_manager.get_department_details(
            parse_numeric_id(department_id, "department")
        )
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DepartmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError:
        logger.exception("GET /api/departments/%s failed", department_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch department details",
        )
    return DataResponse[DepartmentDetails](data=details)
