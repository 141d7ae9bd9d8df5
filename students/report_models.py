# students/report_models.py
"""
Unmanaged models over the reporting SQL views.

The views themselves are created by the ``0002_reporting_views`` migration
from the SQL in ``students.sql_views``. Rows cannot be written through these
models.
"""

from django.db import models, NotSupportedError


class ReportView(models.Model):
    """Base class for models backed by a read-only database view"""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        raise NotSupportedError(f"{self.__class__.__name__} is a read-only database view")

    def delete(self, *args, **kwargs):
        raise NotSupportedError(f"{self.__class__.__name__} is a read-only database view")


class CourseRoster(ReportView):
    """Every enrollment in every offering, including dropped and withdrawn ones"""
    offering = models.ForeignKey(
        'academics.CourseOffering',
        on_delete=models.DO_NOTHING,
        related_name='+'
    )
    course_code = models.CharField(max_length=20)
    course_title = models.CharField(max_length=200)
    term = models.CharField(max_length=20)
    year = models.PositiveSmallIntegerField()
    section = models.CharField(max_length=10)
    student = models.ForeignKey('students.Student', on_delete=models.DO_NOTHING, related_name='+')
    student_number = models.CharField(max_length=20)
    student_name = models.CharField(max_length=101)
    status = models.CharField(max_length=10)
    grade = models.CharField(max_length=4, null=True)

    class Meta:
        managed = False
        db_table = 'students_course_roster'
        ordering = ['course_code', 'year', 'term', 'section', 'student_number']
        verbose_name = "Course Roster Entry"
        verbose_name_plural = "Course Roster"


class StudentTranscript(ReportView):
    """Enrollments with a recorded grade, whatever their status"""
    student = models.ForeignKey('students.Student', on_delete=models.DO_NOTHING, related_name='+')
    student_number = models.CharField(max_length=20)
    student_name = models.CharField(max_length=101)
    course_code = models.CharField(max_length=20)
    course_title = models.CharField(max_length=200)
    credits = models.PositiveSmallIntegerField()
    term = models.CharField(max_length=20)
    year = models.PositiveSmallIntegerField()
    grade = models.CharField(max_length=4)

    class Meta:
        managed = False
        db_table = 'students_student_transcript'
        ordering = ['student_number', 'year', 'term', 'course_code']
        verbose_name = "Transcript Entry"
        verbose_name_plural = "Student Transcript"


class StudentGPA(ReportView):
    """Credit-weighted GPA per student; NULL when nothing on the scale is graded"""
    student = models.OneToOneField(
        'students.Student',
        on_delete=models.DO_NOTHING,
        primary_key=True,
        related_name='gpa_record'
    )
    student_number = models.CharField(max_length=20)
    student_name = models.CharField(max_length=101)
    gpa = models.DecimalField(max_digits=4, decimal_places=2, null=True)
    graded_credits = models.PositiveIntegerField()

    class Meta:
        managed = False
        db_table = 'students_student_gpa'
        ordering = ['student_number']
        verbose_name = "Student GPA"
        verbose_name_plural = "Student GPAs"
