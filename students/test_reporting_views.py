"""
Tests for the CourseRoster, StudentTranscript and StudentGPA database views.
"""

from decimal import Decimal

from django.db import NotSupportedError
from django.test import TestCase

from academics.models import Course, CourseOffering
from students.models import Student, Enrollment, CourseRoster, StudentTranscript, StudentGPA


class ReportingViewTestCase(TestCase):

    def setUp(self):
        """Set up two three-credit courses and one student"""
        self.cs101 = Course.objects.create(code='CS101', title='Intro to CS', credits=3)
        self.cs201 = Course.objects.create(code='CS201', title='Databases', credits=3)
        self.cs101_fall = CourseOffering.objects.create(course=self.cs101, term='Fall', year=2023)
        self.cs201_fall = CourseOffering.objects.create(course=self.cs201, term='Fall', year=2023)
        self.student = Student.objects.create(
            student_number='S2023001',
            first_name='Alice',
            last_name='Smith'
        )

    def complete(self, offering, grade, student=None):
        return Enrollment.objects.create(
            student=student or self.student,
            offering=offering,
            status='completed',
            grade=grade
        )


class StudentGPAViewTests(ReportingViewTestCase):

    def test_credit_weighted_gpa(self):
        self.complete(self.cs101_fall, 'A')
        self.complete(self.cs201_fall, 'B+')

        record = StudentGPA.objects.get(student=self.student)
        self.assertEqual(record.gpa, Decimal('3.65'))
        self.assertEqual(record.graded_credits, 6)
        self.assertEqual(record.student_name, 'Alice Smith')

    def test_row_for_student_without_enrollments(self):
        record = StudentGPA.objects.get(student_number='S2023001')
        self.assertIsNone(record.gpa)
        self.assertEqual(record.graded_credits, 0)

    def test_ungraded_enrollments_do_not_count(self):
        Enrollment.objects.create(student=self.student, offering=self.cs101_fall)

        record = StudentGPA.objects.get(student=self.student)
        self.assertIsNone(record.gpa)
        self.assertEqual(record.graded_credits, 0)

    def test_unmapped_grade_is_ignored(self):
        """A grade off the scale adds neither points nor credits"""
        self.complete(self.cs101_fall, 'A')
        enrollment = self.complete(self.cs201_fall, 'B')
        # Bypasses model validation, as a direct database write would
        Enrollment.objects.filter(pk=enrollment.pk).update(grade='P')

        record = StudentGPA.objects.get(student=self.student)
        self.assertEqual(record.gpa, Decimal('4.00'))
        self.assertEqual(record.graded_credits, 3)

    def test_view_matches_python_calculation(self):
        self.complete(self.cs101_fall, 'B-')
        self.complete(self.cs201_fall, 'C+')

        self.assertEqual(StudentGPA.objects.get(student=self.student).gpa, self.student.calculate_gpa())
        self.assertEqual(self.student.gpa_record.gpa, Decimal('2.50'))

    def test_one_row_per_student(self):
        other = Student.objects.create(student_number='S2023002', first_name='Bob', last_name='Jones')
        self.complete(self.cs101_fall, 'A')
        self.complete(self.cs201_fall, 'A')
        self.complete(self.cs101_fall, 'F', student=other)

        self.assertEqual(StudentGPA.objects.count(), 2)
        self.assertEqual(StudentGPA.objects.get(student=other).gpa, Decimal('0.00'))

    def test_view_rows_are_read_only(self):
        record = StudentGPA.objects.get(student=self.student)
        with self.assertRaises(NotSupportedError):
            record.save()
        with self.assertRaises(NotSupportedError):
            record.delete()


class StudentTranscriptViewTests(ReportingViewTestCase):

    def test_only_graded_enrollments_appear(self):
        self.complete(self.cs101_fall, 'A')
        Enrollment.objects.create(student=self.student, offering=self.cs201_fall, status='completed')

        rows = list(StudentTranscript.objects.filter(student=self.student))
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].course_code, 'CS101')
        self.assertEqual(rows[0].credits, 3)
        self.assertEqual(rows[0].grade, 'A')

    def test_grade_kept_regardless_of_status(self):
        Enrollment.objects.create(
            student=self.student, offering=self.cs101_fall, status='withdrawn', grade='F'
        )
        self.assertEqual(StudentTranscript.objects.get().grade, 'F')

    def test_rows_follow_the_enrollment(self):
        enrollment = self.complete(self.cs101_fall, 'A')
        enrollment.delete()
        self.assertFalse(StudentTranscript.objects.exists())


class CourseRosterViewTests(ReportingViewTestCase):

    def test_roster_lists_every_enrollment(self):
        other = Student.objects.create(student_number='S2023002', first_name='Bob', last_name='Jones')
        Enrollment.objects.create(student=self.student, offering=self.cs101_fall)
        Enrollment.objects.create(student=other, offering=self.cs101_fall, status='dropped')

        rows = list(CourseRoster.objects.filter(course_code='CS101'))
        self.assertEqual(
            [(row.student_number, row.status) for row in rows],
            [('S2023001', 'enrolled'), ('S2023002', 'dropped')]
        )
        self.assertEqual(rows[1].student_name, 'Bob Jones')
        self.assertEqual(rows[0].term, 'Fall')
        self.assertEqual(rows[0].year, 2023)
        self.assertEqual(rows[0].section, 'A')
        self.assertIsNone(rows[0].grade)

    def test_offering_without_enrollments_has_no_rows(self):
        self.assertFalse(CourseRoster.objects.filter(offering=self.cs201_fall).exists())

    def test_row_identity_is_the_enrollment(self):
        enrollment = Enrollment.objects.create(student=self.student, offering=self.cs101_fall)
        self.assertEqual(CourseRoster.objects.get().pk, enrollment.pk)
