"""Composite detail responses.

Each detail endpoint returns one primary row plus the related collections
assembled from joined queries. User details are a sum type over the user's
role: the three variants forbid extra keys so a payload can only ever
validate as the variant it was built as.
"""

from typing import List, Union

from pydantic import ConfigDict, Field

from schemas.base import APIModel
from schemas.class_schema import (
    ClassInfo,
    ClassWithRelations,
    ClassWithSubjectAndDepartment,
    ClassWithSubjectAndTeacher,
    ClassWithTeacher,
)
from schemas.department import DepartmentInfo
from schemas.enrollment import EnrollmentWithRelations
from schemas.subject import SubjectInfo, SubjectWithClassCount, SubjectWithDepartment
from schemas.user import EnrolledStudent, UserInfo


# --- Departments ---


class DepartmentTotals(APIModel):
    subjects: int
    classes: int
    enrolled_students: int


class DepartmentDetails(APIModel):
    department: DepartmentInfo
    subjects: List[SubjectWithClassCount]
    classes: List[ClassWithSubjectAndTeacher]
    enrolled_students: List[EnrolledStudent]
    totals: DepartmentTotals


# --- Subjects ---


class SubjectTotals(APIModel):
    classes: int


class SubjectDetails(APIModel):
    subject: SubjectWithDepartment
    classes: List[ClassWithTeacher]
    totals: SubjectTotals


# --- Classes ---


class ClassTotals(APIModel):
    enrolled_students: int


class ClassDetails(APIModel):
    # "class" is a keyword
    class_: ClassWithRelations = Field(alias="class")
    enrolled_students: List[EnrolledStudent]
    totals: ClassTotals


# --- Users ---


class TeacherTotals(APIModel):
    classes: int
    subjects: int
    departments: int


class StudentTotals(APIModel):
    enrollments: int
    classes: int
    subjects: int


class UserDetails(APIModel):
    """Details of a user without a role-specific aggregate (admins)."""

    model_config = ConfigDict(extra="forbid")

    user: UserInfo


class TeacherDetails(APIModel):
    """Details of a teacher: the classes they teach and what those cover."""

    model_config = ConfigDict(extra="forbid")

    user: UserInfo
    classes: List[ClassWithSubjectAndDepartment]
    subjects: List[SubjectInfo]
    departments: List[DepartmentInfo]
    totals: TeacherTotals


class StudentDetails(APIModel):
    """Details of a student: their enrollments and the classes behind them."""

    model_config = ConfigDict(extra="forbid")

    user: UserInfo
    enrollments: List[EnrollmentWithRelations]
    classes: List[ClassInfo]
    subjects: List[SubjectInfo]
    totals: StudentTotals


AnyUserDetails = Union[TeacherDetails, StudentDetails, UserDetails]
