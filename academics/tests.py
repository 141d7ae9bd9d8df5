# academics/tests.py
from datetime import date

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import RestrictedError
from django.test import TestCase

from academics.models import (
    Department, Program, Instructor, Course, CoursePrerequisite, CourseOffering
)


class DepartmentDeletionTests(TestCase):
    """Restrict and set-null rules around department deletion"""

    def setUp(self):
        self.cs = Department.objects.create(code='CS', name='Computer Science')
        self.eng = Department.objects.create(code='ENG', name='English')

        self.program = Program.objects.create(
            code='BSC-CS',
            name='BSc Computer Science',
            department=self.cs
        )
        self.instructor = Instructor.objects.create(
            employee_number='EMP2001',
            first_name='Grace',
            last_name='Lee',
            email='grace.lee@university.edu',
            department=self.eng
        )
        self.course = Course.objects.create(
            code='ENG101',
            title='Academic Writing',
            credits=3,
            department=self.eng
        )

    def test_department_with_program_cannot_be_deleted(self):
        """A department that still runs a program is protected"""
        with self.assertRaises(RestrictedError):
            self.cs.delete()

        self.assertTrue(Department.objects.filter(code='CS').exists())
        self.assertTrue(Program.objects.filter(code='BSC-CS').exists())

    def test_department_without_programs_nulls_references(self):
        """Instructors and courses survive the deletion without a department"""
        self.eng.delete()

        self.instructor.refresh_from_db()
        self.course.refresh_from_db()
        self.assertIsNone(self.instructor.department)
        self.assertIsNone(self.course.department)
        self.assertFalse(Department.objects.filter(code='ENG').exists())

    def test_department_deletable_after_programs_removed(self):
        self.program.delete()
        self.cs.delete()
        self.assertFalse(Department.objects.filter(code='CS').exists())


class InstructorModelTests(TestCase):

    def test_blank_identifiers_do_not_collide(self):
        """Instructors without employee number or email can coexist"""
        first = Instructor.objects.create(first_name='Ann', last_name='One', email='', employee_number='')
        second = Instructor.objects.create(first_name='Ben', last_name='Two', email='', employee_number='')

        self.assertIsNone(first.email)
        self.assertIsNone(second.employee_number)
        self.assertEqual(Instructor.objects.count(), 2)

    def test_duplicate_email_rejected(self):
        Instructor.objects.create(first_name='Ann', last_name='One', email='ann@university.edu')
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Instructor.objects.create(first_name='Ann', last_name='Other', email='ann@university.edu')


class CourseModelTests(TestCase):

    def setUp(self):
        self.department = Department.objects.create(code='CS', name='Computer Science')

    def test_credits_must_be_positive(self):
        with self.assertRaises(ValidationError):
            Course.objects.create(code='CS000', title='Nothing', credits=0, department=self.department)

    def test_course_code_is_unique(self):
        Course.objects.create(code='CS101', title='Intro', credits=3)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Course.objects.create(code='CS101', title='Intro again', credits=3)

    def test_department_is_optional(self):
        course = Course.objects.create(code='GEN100', title='General Studies', credits=2)
        self.assertIsNone(course.department)


class CoursePrerequisiteTests(TestCase):
    """Self-reference and cycle rules for prerequisites"""

    def setUp(self):
        self.cs101 = Course.objects.create(code='CS101', title='Intro to CS', credits=3)
        self.cs102 = Course.objects.create(code='CS102', title='Data Structures', credits=3)
        self.cs201 = Course.objects.create(code='CS201', title='Databases', credits=3)

    def test_add_prerequisite(self):
        self.cs102.add_prerequisite(self.cs101)

        self.assertEqual(list(self.cs102.prerequisites.all()), [self.cs101])
        self.assertEqual(list(self.cs101.required_by.all()), [self.cs102])

    def test_add_prerequisite_is_idempotent(self):
        self.cs102.add_prerequisite(self.cs101)
        self.cs102.add_prerequisite(self.cs101)
        self.assertEqual(CoursePrerequisite.objects.count(), 1)

    def test_course_cannot_require_itself(self):
        with self.assertRaises(ValidationError):
            self.cs101.add_prerequisite(self.cs101)
        self.assertEqual(CoursePrerequisite.objects.count(), 0)

    def test_self_reference_rejected_by_database(self):
        """The check constraint holds even when save() is bypassed"""
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                CoursePrerequisite.objects.bulk_create([
                    CoursePrerequisite(course=self.cs101, prerequisite=self.cs101)
                ])

    def test_direct_cycle_rejected(self):
        self.cs102.add_prerequisite(self.cs101)
        with self.assertRaises(ValidationError):
            self.cs101.add_prerequisite(self.cs102)

    def test_unsaved_link_without_course_skips_graph_checks(self):
        """clean() leaves missing ends to field validation"""
        link = CoursePrerequisite(prerequisite=self.cs101)
        link.clean()

        with self.assertRaises(ValidationError) as ctx:
            link.full_clean()
        self.assertIn('course', ctx.exception.message_dict)

    def test_transitive_cycle_rejected(self):
        self.cs102.add_prerequisite(self.cs101)
        self.cs201.add_prerequisite(self.cs102)

        with self.assertRaises(ValidationError):
            self.cs101.add_prerequisite(self.cs201)

    def test_get_all_prerequisites_is_transitive(self):
        self.cs102.add_prerequisite(self.cs101)
        self.cs201.add_prerequisite(self.cs102)

        self.assertEqual(
            set(self.cs201.get_all_prerequisites()),
            {self.cs101, self.cs102}
        )
        self.assertTrue(self.cs201.requires(self.cs101))
        self.assertFalse(self.cs101.requires(self.cs201))

    def test_deleting_course_removes_links_both_ways(self):
        self.cs102.add_prerequisite(self.cs101)
        self.cs201.add_prerequisite(self.cs102)

        self.cs102.delete()

        self.assertEqual(CoursePrerequisite.objects.count(), 0)
        self.assertEqual(self.cs201.prerequisites.count(), 0)


class CourseOfferingTests(TestCase):

    def setUp(self):
        self.course = Course.objects.create(code='CS101', title='Intro to CS', credits=3)
        self.instructor = Instructor.objects.create(
            employee_number='EMP1001', first_name='Laura', last_name='Adams'
        )

    def test_offering_unique_per_course_term_year_section(self):
        CourseOffering.objects.create(course=self.course, term='Fall', year=2023)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                CourseOffering.objects.create(course=self.course, term='Fall', year=2023, section='A')

    def test_other_section_allowed(self):
        CourseOffering.objects.create(course=self.course, term='Fall', year=2023)
        CourseOffering.objects.create(course=self.course, term='Fall', year=2023, section='B')
        self.assertEqual(self.course.offerings.count(), 2)

    def test_defaults(self):
        offering = CourseOffering.objects.create(course=self.course, term='Fall', year=2023)
        self.assertEqual(offering.section, 'A')
        self.assertEqual(offering.capacity, 0)
        self.assertFalse(offering.is_full())

    def test_dates_must_be_ordered(self):
        with self.assertRaises(ValidationError):
            CourseOffering.objects.create(
                course=self.course,
                term='Fall',
                year=2023,
                start_date=date(2023, 12, 15),
                end_date=date(2023, 9, 1)
            )

    def test_deleting_instructor_nulls_offering(self):
        offering = CourseOffering.objects.create(
            course=self.course, instructor=self.instructor, term='Fall', year=2023
        )
        self.instructor.delete()

        offering.refresh_from_db()
        self.assertIsNone(offering.instructor)

    def test_deleting_course_removes_offerings(self):
        CourseOffering.objects.create(course=self.course, term='Fall', year=2023)
        self.course.delete()
        self.assertEqual(CourseOffering.objects.count(), 0)
