"""Custom exception classes for the Academic Administration API.

This module defines application-specific exceptions following Google Python
Style Guide.
"""


class AcademicAPIError(Exception):
    """Base exception for all Academic Administration API errors."""

    pass


class InvalidIdentifierError(AcademicAPIError):
    """Raised when a path identifier is not a valid numeric id."""

    def __init__(self, resource: str, raw_id: str):
        """Initialize the exception.

        Args:
            resource: Resource name, e.g. ``"department"``.
            raw_id: The identifier as received in the request path.
        """
        self.resource = resource
        self.raw_id = raw_id
        super().__init__(f"Invalid {resource} id")


class NotFoundError(AcademicAPIError):
    """Raised when a requested row cannot be found."""

    resource = "Resource"

    def __init__(self, resource_id):
        """Initialize the exception.

        Args:
            resource_id: The ID of the row that was not found.
        """
        self.resource_id = resource_id
        super().__init__(f"{self.resource} not found")


class UserNotFoundError(NotFoundError):
    """Raised when a requested user cannot be found."""

    resource = "User"


class DepartmentNotFoundError(NotFoundError):
    """Raised when a requested department cannot be found."""

    resource = "Department"


class SubjectNotFoundError(NotFoundError):
    """Raised when a requested subject cannot be found."""

    resource = "Subject"


class ClassNotFoundError(NotFoundError):
    """Raised when a requested class cannot be found."""

    resource = "Class"
