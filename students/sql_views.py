"""
SQL for the three reporting views.

Table and view names are read from the (historical) models handed in by the
migration, so the SQL follows any ``db_table`` change. The only vendor
difference is string concatenation: MySQL needs CONCAT(), the others use ||.
"""

import logging

from .grading import grade_points_case_sql

logger = logging.getLogger(__name__)

VIEW_MODELS = ('CourseRoster', 'StudentTranscript', 'StudentGPA')


def _full_name_sql(vendor, alias):
    if vendor == 'mysql':
        return f"CONCAT({alias}.first_name, ' ', {alias}.last_name)"
    return f"{alias}.first_name || ' ' || {alias}.last_name"


def _tables(apps):
    def table(app_label, model_name):
        return apps.get_model(app_label, model_name)._meta.db_table

    return {
        'student': table('students', 'Student'),
        'enrollment': table('students', 'Enrollment'),
        'offering': table('academics', 'CourseOffering'),
        'course': table('academics', 'Course'),
    }


def course_roster_sql(tables, vendor):
    name = _full_name_sql(vendor, 's')
    return f"""
        SELECT e.id AS id,
               o.id AS offering_id,
               c.code AS course_code,
               c.title AS course_title,
               o.term AS term,
               o.year AS year,
               o.section AS section,
               s.id AS student_id,
               s.student_number AS student_number,
               {name} AS student_name,
               e.status AS status,
               e.grade AS grade
        FROM {tables['offering']} o
        JOIN {tables['course']} c ON o.course_id = c.id
        JOIN {tables['enrollment']} e ON e.offering_id = o.id
        JOIN {tables['student']} s ON e.student_id = s.id
    """


def student_transcript_sql(tables, vendor):
    name = _full_name_sql(vendor, 's')
    return f"""
        SELECT e.id AS id,
               s.id AS student_id,
               s.student_number AS student_number,
               {name} AS student_name,
               c.code AS course_code,
               c.title AS course_title,
               c.credits AS credits,
               o.term AS term,
               o.year AS year,
               e.grade AS grade
        FROM {tables['student']} s
        JOIN {tables['enrollment']} e ON e.student_id = s.id
        JOIN {tables['offering']} o ON e.offering_id = o.id
        JOIN {tables['course']} c ON o.course_id = c.id
        WHERE e.grade IS NOT NULL
    """


def student_gpa_sql(tables, vendor):
    name = _full_name_sql(vendor, 's')
    points = grade_points_case_sql('e.grade')
    # Credits only count when the grade maps to points
    counted_credits = f"CASE WHEN {points} IS NOT NULL THEN c.credits END"
    return f"""
        SELECT s.id AS student_id,
               s.student_number AS student_number,
               {name} AS student_name,
               ROUND(SUM({points} * c.credits) / NULLIF(SUM({counted_credits}), 0), 2) AS gpa,
               COALESCE(SUM({counted_credits}), 0) AS graded_credits
        FROM {tables['student']} s
        LEFT JOIN {tables['enrollment']} e ON e.student_id = s.id AND e.grade IS NOT NULL
        LEFT JOIN {tables['offering']} o ON e.offering_id = o.id
        LEFT JOIN {tables['course']} c ON o.course_id = c.id
        GROUP BY s.id, s.student_number, s.first_name, s.last_name
    """


VIEW_BUILDERS = {
    'CourseRoster': course_roster_sql,
    'StudentTranscript': student_transcript_sql,
    'StudentGPA': student_gpa_sql,
}


def create_reporting_views(apps, schema_editor):
    """Migration hook: (re)create every reporting view"""
    vendor = schema_editor.connection.vendor
    tables = _tables(apps)
    quote = schema_editor.quote_name

    for model_name in VIEW_MODELS:
        view = apps.get_model('students', model_name)._meta.db_table
        select = VIEW_BUILDERS[model_name](tables, vendor)
        schema_editor.execute(f"DROP VIEW IF EXISTS {quote(view)}")
        schema_editor.execute(f"CREATE VIEW {quote(view)} AS {select}")
        logger.info("Created reporting view %s", view)


def drop_reporting_views(apps, schema_editor):
    """Migration hook: remove the reporting views"""
    quote = schema_editor.quote_name
    for model_name in reversed(VIEW_MODELS):
        view = apps.get_model('students', model_name)._meta.db_table
        schema_editor.execute(f"DROP VIEW IF EXISTS {quote(view)}")
        logger.info("Dropped reporting view %s", view)
