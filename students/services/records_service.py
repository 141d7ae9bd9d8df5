"""
Records Service

Deletion of records as explicit operations. The cascade itself is declared on
the models (CASCADE, RESTRICT, SET_NULL) and carried out by Django's deletion
collector; this service runs each deletion atomically, reports how many rows
of each model went with it and turns a restrict refusal into a domain error.
"""

import logging
from typing import Dict

from django.db import transaction
from django.db.models import RestrictedError

from academics.models import Course, Department
from students.models import Student

logger = logging.getLogger(__name__)


class RecordsServiceError(Exception):
    """Base exception for records service errors"""
    pass


class DepartmentInUseError(RecordsServiceError):
    """Raised when a department still has programs"""

    def __init__(self, department, program_codes):
        self.department = department
        self.program_codes = list(program_codes)
        super().__init__(
            f"Department {department.code} still has programs: {', '.join(self.program_codes)}"
        )


def _delete(instance) -> Dict[str, int]:
    with transaction.atomic():
        _, per_model = instance.delete()
    return {label: count for label, count in per_model.items() if count}


def erase_student(student: Student) -> Dict[str, int]:
    """
    Delete a student together with addresses, enrollments and program
    memberships.

    Returns:
        Deleted row counts keyed by model label, e.g. ``{'students.Address': 1}``
    """
    student_number = student.student_number
    removed = _delete(student)
    logger.info(f"Erased student {student_number}: {removed}")
    return removed


def retire_course(course: Course) -> Dict[str, int]:
    """
    Delete a course with its offerings, prerequisite links and, through the
    offerings, every enrollment in it.
    """
    code = course.code
    removed = _delete(course)
    logger.info(f"Retired course {code}: {removed}")
    return removed


def remove_department(department: Department) -> Dict[str, int]:
    """
    Delete a department. Instructors and courses keep existing without a
    department; programs block the deletion.

    Raises:
        DepartmentInUseError: If any program still belongs to the department
    """
    try:
        removed = _delete(department)
    except RestrictedError:
        codes = department.programs.values_list('code', flat=True)
        logger.warning(f"Refused to remove department {department.code}: programs {list(codes)}")
        raise DepartmentInUseError(department, codes)

    logger.info(f"Removed department {department.code}: {removed}")
    return removed
