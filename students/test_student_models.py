"""
Tests for the student record models: identity rules, the updated_at stamp,
cascading deletes, grade validation and offering capacity.
"""

from datetime import timedelta
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import TestCase
from django.utils import timezone

from academics.models import Department, Program, Course, CourseOffering
from students.models import Student, Address, StudentProgram, Enrollment


class StudentIdentityTests(TestCase):
    """Student number and email uniqueness"""

    def setUp(self):
        """Set up test data"""
        self.student = Student.objects.create(
            student_number='S2023001',
            first_name='Alice',
            last_name='Smith',
            email='alice.smith@example.com'
        )

    def test_student_number_is_unique(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Student.objects.create(student_number='S2023001', first_name='Other', last_name='Person')

    def test_email_is_unique(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Student.objects.create(
                    student_number='S2023002',
                    first_name='Other',
                    last_name='Person',
                    email='alice.smith@example.com'
                )

    def test_students_without_email_coexist(self):
        first = Student.objects.create(student_number='S2023002', first_name='Bob', last_name='Jones', email='')
        Student.objects.create(student_number='S2023003', first_name='Joy', last_name='Gray')

        self.assertIsNone(first.email)
        self.assertEqual(Student.objects.filter(email__isnull=True).count(), 2)

    def test_full_name_and_defaults(self):
        self.assertEqual(self.student.full_name, 'Alice Smith')
        self.assertEqual(self.student.gender, 'X')
        self.assertIsNotNone(self.student.created_at)


class StudentUpdatedAtTests(TestCase):
    """updated_at is restamped on every kind of write"""

    def setUp(self):
        """Set up a student whose stamp lies an hour in the past"""
        self.student = Student.objects.create(
            student_number='S2023001',
            first_name='Alice',
            last_name='Smith'
        )
        self.past = timezone.now() - timedelta(hours=1)
        # The base manager is a plain queryset, so the stamp is not overridden
        Student._base_manager.filter(pk=self.student.pk).update(updated_at=self.past)
        self.student.refresh_from_db()

    def test_backdating_helper(self):
        self.assertEqual(self.student.updated_at, self.past)

    def test_save_restamps(self):
        self.student.phone = '+1-555-0101'
        self.student.save()

        self.student.refresh_from_db()
        self.assertGreater(self.student.updated_at, self.past)

    def test_save_with_update_fields_restamps(self):
        self.student.phone = '+1-555-0101'
        self.student.save(update_fields=['phone'])

        self.student.refresh_from_db()
        self.assertEqual(self.student.phone, '+1-555-0101')
        self.assertGreater(self.student.updated_at, self.past)

    def test_queryset_update_restamps(self):
        Student.objects.filter(pk=self.student.pk).update(phone='+1-555-0199')

        self.student.refresh_from_db()
        self.assertGreater(self.student.updated_at, self.past)

    def test_supplied_updated_at_is_overridden(self):
        Student.objects.filter(pk=self.student.pk).update(updated_at=self.past - timedelta(days=30))

        self.student.refresh_from_db()
        self.assertGreater(self.student.updated_at, self.past)

    def test_created_at_is_not_touched(self):
        created_at = self.student.created_at
        self.student.first_name = 'Alicia'
        self.student.save()

        self.student.refresh_from_db()
        self.assertEqual(self.student.created_at, created_at)


class EnrollmentModelTests(TestCase):

    def setUp(self):
        """Set up test data"""
        self.department = Department.objects.create(code='CS', name='Computer Science')
        self.program = Program.objects.create(code='BSC-CS', name='BSc Computer Science', department=self.department)
        self.course = Course.objects.create(code='CS101', title='Intro to CS', credits=3, department=self.department)
        self.offering = CourseOffering.objects.create(course=self.course, term='Fall', year=2023)
        self.student = Student.objects.create(
            student_number='S2023001',
            first_name='Alice',
            last_name='Smith'
        )

    def test_duplicate_enrollment_rejected(self):
        Enrollment.objects.create(student=self.student, offering=self.offering)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Enrollment.objects.bulk_create([Enrollment(student=self.student, offering=self.offering)])

    def test_defaults(self):
        enrollment = Enrollment.objects.create(student=self.student, offering=self.offering)
        self.assertEqual(enrollment.status, 'enrolled')
        self.assertIsNone(enrollment.grade)
        self.assertEqual(enrollment.enrollment_date, timezone.localdate())
        self.assertFalse(enrollment.is_graded)

    def test_grade_is_normalized(self):
        enrollment = Enrollment.objects.create(student=self.student, offering=self.offering, grade=' b+ ')
        enrollment.refresh_from_db()

        self.assertEqual(enrollment.grade, 'B+')
        self.assertEqual(enrollment.grade_points, Decimal('3.3'))

    def test_blank_grade_becomes_null(self):
        enrollment = Enrollment.objects.create(student=self.student, offering=self.offering, grade='')
        self.assertIsNone(enrollment.grade)

    def test_unknown_grade_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            Enrollment.objects.create(student=self.student, offering=self.offering, grade='E')

        self.assertIn('grade', ctx.exception.message_dict)
        self.assertEqual(Enrollment.objects.count(), 0)

    def test_full_offering_refuses_new_enrollment(self):
        self.offering.capacity = 1
        self.offering.save()
        Enrollment.objects.create(student=self.student, offering=self.offering)
        other = Student.objects.create(student_number='S2023002', first_name='Bob', last_name='Jones')

        self.assertTrue(self.offering.is_full())
        with self.assertRaises(ValidationError):
            Enrollment.objects.create(student=other, offering=self.offering)

    def test_dropped_enrollment_frees_the_seat(self):
        self.offering.capacity = 1
        self.offering.save()
        enrollment = Enrollment.objects.create(student=self.student, offering=self.offering)
        enrollment.status = 'dropped'
        enrollment.save()
        other = Student.objects.create(student_number='S2023002', first_name='Bob', last_name='Jones')

        self.assertFalse(self.offering.is_full())
        Enrollment.objects.create(student=other, offering=self.offering)
        self.assertEqual(self.offering.get_enrollment_count(), 1)

    def test_reactivating_into_full_offering_refused(self):
        """A dropped enrollment cannot take its seat back once it was given away"""
        self.offering.capacity = 1
        self.offering.save()
        enrollment = Enrollment.objects.create(student=self.student, offering=self.offering)
        enrollment.status = 'dropped'
        enrollment.save()
        other = Student.objects.create(student_number='S2023002', first_name='Bob', last_name='Jones')
        Enrollment.objects.create(student=other, offering=self.offering)

        enrollment.status = 'enrolled'
        with self.assertRaises(ValidationError):
            enrollment.save()

        self.assertEqual(self.offering.get_enrollment_count(), 1)
        enrollment.refresh_from_db()
        self.assertEqual(enrollment.status, 'dropped')

    def test_reactivating_with_free_seat_allowed(self):
        self.offering.capacity = 1
        self.offering.save()
        enrollment = Enrollment.objects.create(student=self.student, offering=self.offering)
        enrollment.status = 'withdrawn'
        enrollment.save()

        enrollment.status = 'enrolled'
        enrollment.save()
        self.assertEqual(self.offering.get_enrollment_count(), 1)

    def test_active_enrollment_in_full_offering_can_be_updated(self):
        """A seat holder is not counted against itself"""
        self.offering.capacity = 1
        self.offering.save()
        enrollment = Enrollment.objects.create(student=self.student, offering=self.offering)

        enrollment.status = 'completed'
        enrollment.grade = 'A'
        enrollment.save()
        enrollment.refresh_from_db()
        self.assertEqual(enrollment.grade, 'A')

    def test_calculate_gpa(self):
        math = Course.objects.create(code='MATH101', title='Calculus I', credits=4)
        math_offering = CourseOffering.objects.create(course=math, term='Fall', year=2023)
        Enrollment.objects.create(student=self.student, offering=self.offering, grade='A', status='completed')
        Enrollment.objects.create(student=self.student, offering=math_offering, grade='C', status='completed')

        # (4.0 * 3 + 2.0 * 4) / 7
        self.assertEqual(self.student.calculate_gpa(), Decimal('2.86'))

    def test_calculate_gpa_without_grades(self):
        Enrollment.objects.create(student=self.student, offering=self.offering)
        self.assertIsNone(self.student.calculate_gpa())


class CascadeTests(TestCase):
    """Deleting a student or a course takes its dependent rows with it"""

    def setUp(self):
        """Set up test data"""
        self.department = Department.objects.create(code='CS', name='Computer Science')
        self.program = Program.objects.create(code='BSC-CS', name='BSc Computer Science', department=self.department)
        self.course = Course.objects.create(code='CS101', title='Intro to CS', credits=3)
        self.offering = CourseOffering.objects.create(course=self.course, term='Fall', year=2023)
        self.student = Student.objects.create(student_number='S2023001', first_name='Alice', last_name='Smith')

        Address.objects.create(student=self.student, line1='123 Maple St', city='Springfield', is_primary=True)
        StudentProgram.objects.create(student=self.student, program=self.program, is_primary=True)
        Enrollment.objects.create(student=self.student, offering=self.offering)

    def test_primary_lookups(self):
        self.assertEqual(self.student.get_primary_address().line1, '123 Maple St')
        self.assertEqual(self.student.get_primary_program(), self.program)

    def test_student_delete_cascades(self):
        self.student.delete()

        self.assertEqual(Address.objects.count(), 0)
        self.assertEqual(StudentProgram.objects.count(), 0)
        self.assertEqual(Enrollment.objects.count(), 0)
        # Reference data is untouched
        self.assertTrue(Program.objects.filter(code='BSC-CS').exists())
        self.assertTrue(CourseOffering.objects.filter(pk=self.offering.pk).exists())

    def test_course_delete_cascades_to_enrollments(self):
        self.course.delete()

        self.assertEqual(CourseOffering.objects.count(), 0)
        self.assertEqual(Enrollment.objects.count(), 0)
        self.assertTrue(Student.objects.filter(pk=self.student.pk).exists())

    def test_program_delete_removes_memberships(self):
        self.program.delete()
        self.assertEqual(StudentProgram.objects.count(), 0)
        self.assertTrue(Student.objects.filter(pk=self.student.pk).exists())

    def test_membership_dates_must_be_ordered(self):
        other = Program.objects.create(code='BSC-MATH', name='BSc Mathematics', department=self.department)
        with self.assertRaises(ValidationError):
            StudentProgram.objects.create(
                student=self.student,
                program=other,
                start_date=timezone.localdate(),
                end_date=timezone.localdate() - timedelta(days=1)
            )
