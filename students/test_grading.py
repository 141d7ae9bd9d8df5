from decimal import Decimal

from django.test import SimpleTestCase

from students.grading import (
    GRADE_POINTS, normalize_grade, is_valid_grade, grade_points, compute_gpa, grade_points_case_sql
)


class GradeScaleTests(SimpleTestCase):

    def test_scale(self):
        self.assertEqual(list(GRADE_POINTS), ['A', 'A-', 'B+', 'B', 'B-', 'C+', 'C', 'C-', 'D', 'F'])
        self.assertEqual(GRADE_POINTS['B+'], Decimal('3.3'))
        self.assertEqual(GRADE_POINTS['F'], Decimal('0.0'))

    def test_normalize_grade(self):
        self.assertEqual(normalize_grade(' a- '), 'A-')
        self.assertIsNone(normalize_grade('   '))
        self.assertIsNone(normalize_grade(None))

    def test_grade_validity(self):
        self.assertTrue(is_valid_grade('c+'))
        self.assertFalse(is_valid_grade('E'))
        self.assertFalse(is_valid_grade(None))
        self.assertIsNone(grade_points('P'))

    def test_case_sql_covers_scale(self):
        sql = grade_points_case_sql('e.grade')
        self.assertTrue(sql.startswith('CASE e.grade'))
        self.assertIn("WHEN 'A-' THEN 3.7", sql)
        self.assertTrue(sql.endswith('ELSE NULL END'))


class ComputeGPATests(SimpleTestCase):

    def test_weighted_average(self):
        self.assertEqual(compute_gpa([('A', 3), ('B+', 3)]), Decimal('3.65'))

    def test_rounds_half_up(self):
        # (3.7 * 1 + 3.3 * 3) / 4 = 3.4
        self.assertEqual(compute_gpa([('A-', 1), ('B+', 3)]), Decimal('3.40'))
        # (3.7 * 6 + 3.0 * 2) / 8 = 3.525
        self.assertEqual(compute_gpa([('A-', 6), ('B', 2)]), Decimal('3.53'))

    def test_nothing_graded(self):
        self.assertIsNone(compute_gpa([]))
        self.assertIsNone(compute_gpa([(None, 3)]))

    def test_off_scale_grades_skipped(self):
        self.assertEqual(compute_gpa([('A', 3), ('P', 4)]), Decimal('4.00'))
        self.assertIsNone(compute_gpa([('W', 3)]))

    def test_zero_credit_rows_skipped(self):
        self.assertEqual(compute_gpa([('F', 0), ('B', 3)]), Decimal('3.00'))
