"""
Registration Service

Creates and updates student records, enrolls students in course offerings and
records final grades. Every operation runs in one transaction, so a failure
leaves no partial registration behind.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from academics.models import CourseOffering, Program
from students.models import Student, Address, StudentProgram, Enrollment
from students.serializers import StudentSerializer, AddressSerializer

logger = logging.getLogger(__name__)


class RegistrationError(Exception):
    """Raised when student data is rejected"""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors or {}


class EnrollmentError(Exception):
    """Raised when an enrollment or grade change is not allowed"""
    pass


def _default_country():
    return settings.STUDENT_RECORDS.get('DEFAULT_COUNTRY', 'USA')


def register_student(
    data: Dict[str, Any],
    addresses: Iterable[Dict[str, Any]] = (),
    programs: Iterable[Dict[str, Any]] = (),
) -> Student:
    """
    Register a new student with addresses and program memberships.

    Args:
        data: Student fields (student_number, first_name, last_name, ...)
        addresses: Address field dicts; country defaults to the configured one
        programs: Dicts with a ``program`` (Program or program code) and
            optional ``start_date``, ``end_date``, ``is_primary``

    Returns:
        The created Student

    Raises:
        RegistrationError: If any of the submitted data is invalid
    """
    serializer = StudentSerializer(data=data)
    if not serializer.is_valid():
        logger.warning(f"Rejected student registration: {serializer.errors}")
        raise RegistrationError("Invalid student data", serializer.errors)

    address_data = [
        {'country': _default_country(), **address} for address in addresses
    ]
    address_serializer = AddressSerializer(data=address_data, many=True)
    if not address_serializer.is_valid():
        logger.warning(f"Rejected student addresses: {address_serializer.errors}")
        raise RegistrationError("Invalid address data", {'addresses': address_serializer.errors})

    with transaction.atomic():
        student = serializer.save()

        for address in address_serializer.validated_data:
            Address.objects.create(student=student, **address)

        for membership in programs:
            membership = dict(membership)
            program = membership.pop('program')
            if not isinstance(program, Program):
                try:
                    program = Program.objects.get(code=program)
                except Program.DoesNotExist:
                    raise RegistrationError(f"Unknown program '{program}'", {'programs': [program]})
            try:
                StudentProgram.objects.create(student=student, program=program, **membership)
            except ValidationError as e:
                raise RegistrationError(str(e), {'programs': e.messages})
            except IntegrityError:
                raise RegistrationError(
                    f"Program '{program.code}' listed more than once",
                    {'programs': [program.code]}
                )

    logger.info(f"Registered {student} with {len(address_data)} address(es)")
    return student


def update_student(student: Student, data: Dict[str, Any]) -> Student:
    """
    Apply a partial update to a student.

    ``created_at`` and ``updated_at`` are read-only: any value supplied for
    them is ignored and ``updated_at`` is stamped with the time of the write.
    """
    serializer = StudentSerializer(student, data=data, partial=True)
    if not serializer.is_valid():
        logger.warning(f"Rejected update of {student.student_number}: {serializer.errors}")
        raise RegistrationError("Invalid student data", serializer.errors)

    with transaction.atomic():
        student = serializer.save()
    return student


def enroll(student: Student, offering: CourseOffering, enrollment_date=None) -> Enrollment:
    """
    Enroll a student in a course offering.

    Raises:
        EnrollmentError: If the student is already enrolled or the offering is full
    """
    if Enrollment.objects.filter(student=student, offering=offering).exists():
        raise EnrollmentError(f"{student.student_number} is already enrolled in {offering}")

    try:
        with transaction.atomic():
            enrollment = Enrollment.objects.create(
                student=student,
                offering=offering,
                enrollment_date=enrollment_date or timezone.localdate(),
            )
    except ValidationError as e:
        logger.warning(f"Enrollment of {student.student_number} in {offering} refused: {e.messages}")
        raise EnrollmentError('; '.join(e.messages))
    except IntegrityError:
        # Lost a race with a concurrent enrollment of the same pair
        raise EnrollmentError(f"{student.student_number} is already enrolled in {offering}")

    return enrollment


def _change_status(enrollment: Enrollment, status: str) -> Enrollment:
    if enrollment.status == 'completed':
        raise EnrollmentError(f"Enrollment {enrollment.pk} is already completed")
    enrollment.status = status
    enrollment.save(update_fields=['status'])
    logger.info(f"Enrollment {enrollment.pk} marked {status}")
    return enrollment


def drop(enrollment: Enrollment) -> Enrollment:
    return _change_status(enrollment, 'dropped')


def withdraw(enrollment: Enrollment) -> Enrollment:
    return _change_status(enrollment, 'withdrawn')


def record_grade(enrollment: Enrollment, grade: Optional[str]) -> Enrollment:
    """
    Record a final grade and mark the enrollment completed.

    Raises:
        EnrollmentError: If the grade is not on the grading scale
    """
    enrollment.grade = grade
    enrollment.status = 'completed'
    try:
        with transaction.atomic():
            enrollment.save(update_fields=['grade', 'status'])
    except ValidationError as e:
        enrollment.refresh_from_db(fields=['grade', 'status'])
        raise EnrollmentError('; '.join(e.messages))

    logger.info(f"Recorded grade {enrollment.grade} for enrollment {enrollment.pk}")
    return enrollment
