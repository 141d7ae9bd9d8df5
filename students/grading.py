"""
Letter-grade scale and GPA arithmetic.

The same table drives the StudentGPA database view (through
``grade_points_case_sql``) and the Python-side calculation in
``compute_gpa``, so both always agree on which grades count.
"""

from decimal import Decimal, ROUND_HALF_UP

# Ordered from best to worst
GRADE_POINTS = {
    'A': Decimal('4.0'),
    'A-': Decimal('3.7'),
    'B+': Decimal('3.3'),
    'B': Decimal('3.0'),
    'B-': Decimal('2.7'),
    'C+': Decimal('2.3'),
    'C': Decimal('2.0'),
    'C-': Decimal('1.7'),
    'D': Decimal('1.0'),
    'F': Decimal('0.0'),
}

GRADE_CHOICES = [(grade, grade) for grade in GRADE_POINTS]

GPA_QUANTUM = Decimal('0.01')


def normalize_grade(grade):
    """Strip and upper-case a grade; blank values become None"""
    if grade is None:
        return None
    grade = str(grade).strip().upper()
    return grade or None


def is_valid_grade(grade):
    return normalize_grade(grade) in GRADE_POINTS


def grade_points(grade):
    """Point value for a letter grade, or None when the grade is not on the scale"""
    return GRADE_POINTS.get(normalize_grade(grade))


def compute_gpa(graded_credits):
    """
    Credit-weighted GPA over ``(grade, credits)`` pairs.

    Grades that are missing or off the scale are ignored entirely: they add
    neither points nor credits. Returns None when no credits count.
    """
    total_points = Decimal('0')
    total_credits = 0
    for grade, credits in graded_credits:
        points = grade_points(grade)
        if points is None or not credits:
            continue
        total_points += points * credits
        total_credits += credits

    if total_credits == 0:
        return None
    return (total_points / total_credits).quantize(GPA_QUANTUM, rounding=ROUND_HALF_UP)


def grade_points_case_sql(column):
    """SQL CASE expression mapping ``column`` to its grade points (NULL otherwise)"""
    whens = ' '.join(
        f"WHEN '{grade}' THEN {points}" for grade, points in GRADE_POINTS.items()
    )
    return f"CASE {column} {whens} ELSE NULL END"
