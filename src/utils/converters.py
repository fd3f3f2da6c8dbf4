"""Converters from ORM rows to API schemas.

Joined queries return tuples in which an entity is ``None`` when its left
join matched nothing; every converter accepts that and yields ``None``.
"""

from typing import Optional, Type, TypeVar

from schemas.base import APIModel
from schemas.class_schema import (
    ClassInfo,
    ClassWithRelations,
    ClassWithSubjectAndDepartment,
    ClassWithSubjectAndTeacher,
    ClassWithTeacher,
)
from schemas.department import DepartmentInfo, DepartmentListItem
from schemas.enrollment import EnrollmentInfo, EnrollmentWithRelations
from schemas.subject import SubjectInfo, SubjectWithClassCount, SubjectWithDepartment
from schemas.user import EnrolledStudent, UserInfo

SchemaT = TypeVar("SchemaT", bound=APIModel)


def _optional(schema: Type[SchemaT], model) -> Optional[SchemaT]:
    if model is None:
        return None
    return schema.model_validate(model)


def _extend(schema: Type[SchemaT], base: APIModel, **related) -> SchemaT:
    return schema(**base.model_dump(), **related)


def model_to_user(model) -> Optional[UserInfo]:
    return _optional(UserInfo, model)


def model_to_department(model) -> Optional[DepartmentInfo]:
    return _optional(DepartmentInfo, model)


def model_to_subject(model) -> Optional[SubjectInfo]:
    return _optional(SubjectInfo, model)


def model_to_class(model) -> Optional[ClassInfo]:
    return _optional(ClassInfo, model)


def row_to_enrolled_student(row) -> EnrolledStudent:
    return EnrolledStudent.model_validate(row)


def department_row_to_list_item(department, total_subjects: int) -> DepartmentListItem:
    return _extend(
        DepartmentListItem,
        model_to_department(department),
        total_subjects=total_subjects or 0,
    )


def subject_row_to_with_department(subject, department) -> SubjectWithDepartment:
    return _extend(
        SubjectWithDepartment,
        model_to_subject(subject),
        department=model_to_department(department),
    )


def subject_row_to_with_class_count(subject, total_classes: int) -> SubjectWithClassCount:
    return _extend(
        SubjectWithClassCount,
        model_to_subject(subject),
        total_classes=total_classes or 0,
    )


def class_row_to_with_teacher(class_model, teacher) -> ClassWithTeacher:
    return _extend(
        ClassWithTeacher, model_to_class(class_model), teacher=model_to_user(teacher)
    )


def class_row_to_with_subject_and_teacher(
    class_model, subject, teacher
) -> ClassWithSubjectAndTeacher:
    return _extend(
        ClassWithSubjectAndTeacher,
        model_to_class(class_model),
        subject=model_to_subject(subject),
        teacher=model_to_user(teacher),
    )


def class_row_to_with_subject_and_department(
    class_model, subject, department
) -> ClassWithSubjectAndDepartment:
    return _extend(
        ClassWithSubjectAndDepartment,
        model_to_class(class_model),
        subject=model_to_subject(subject),
        department=model_to_department(department),
    )


def class_row_to_with_relations(
    class_model, subject, department, teacher
) -> ClassWithRelations:
    return _extend(
        ClassWithRelations,
        model_to_class(class_model),
        subject=model_to_subject(subject),
        department=model_to_department(department),
        teacher=model_to_user(teacher),
    )


def enrollment_row_to_with_relations(
    enrollment, class_model, subject, department, teacher
) -> EnrollmentWithRelations:
    return _extend(
        EnrollmentWithRelations,
        EnrollmentInfo.model_validate(enrollment),
        class_=model_to_class(class_model),
        subject=model_to_subject(subject),
        department=model_to_department(department),
        teacher=model_to_user(teacher),
    )
