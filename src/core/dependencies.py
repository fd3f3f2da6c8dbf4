"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes,
wiring a manager to the request-scoped database session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import Database, get_database, get_db
from utils import class_manager
from utils import department_manager
from utils import subject_manager
from utils import user_manager


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_department_manager(
    db: Session = Depends(get_db),
    database: Database = Depends(get_database),
) -> department_manager.DepartmentManager:
    """Get DepartmentManager instance.

    The manager receives the request-scoped session plus the database handle,
    from which the detail view opens one extra session per concurrent fetch.

    Args:
        db: Database session.
        database: Application database handle.

    Returns:
        DepartmentManager instance.
    """
    return department_manager.DepartmentManager(db, session_factory=database.session)


def get_subject_manager(db: Session = Depends(get_db)) -> subject_manager.SubjectManager:
    """Get SubjectManager instance with request-scoped DB session."""
    return subject_manager.SubjectManager(db)


def get_class_manager(db: Session = Depends(get_db)) -> class_manager.ClassManager:
    """Get ClassManager instance with request-scoped DB session."""
    return class_manager.ClassManager(db)


# Type aliases for dependency injection
UserManagerDep = Annotated[
    user_manager.UserManager, Depends(get_user_manager)
]
DepartmentManagerDep = Annotated[
    department_manager.DepartmentManager, Depends(get_department_manager)
]
SubjectManagerDep = Annotated[
    subject_manager.SubjectManager, Depends(get_subject_manager)
]
ClassManagerDep = Annotated[
    class_manager.ClassManager, Depends(get_class_manager)
]
