# students/managers.py
from django.db import models
from django.utils import timezone


class StudentQuerySet(models.QuerySet):
    """Queryset for students that keeps ``updated_at`` honest on bulk writes"""

    def update(self, **kwargs):
        # Bulk updates skip save(), so auto_now never fires; stamp it here.
        # Any caller-supplied updated_at is overridden.
        kwargs['updated_at'] = timezone.now()
        return super().update(**kwargs)

    def by_number(self, student_number):
        return self.get(student_number=student_number)

    def with_graded_enrollments(self):
        """Students that have at least one recorded grade"""
        return self.filter(enrollments__grade__isnull=False).distinct()


class EnrollmentQuerySet(models.QuerySet):

    def active(self):
        """Enrollments still holding a seat in their offering"""
        return self.filter(status__in=['enrolled', 'completed'])

    def graded(self):
        return self.filter(grade__isnull=False)

    def for_term(self, term, year):
        return self.filter(offering__term=term, offering__year=year)
