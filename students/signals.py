"""
Django signals for logging the lifecycle of student records.

The updated_at stamp itself is handled by the model (auto_now plus the
Student.save()/StudentQuerySet.update() overrides); these receivers only
leave a trace in the log of who was created, changed and erased.
"""

from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging

from students.models import Student, Enrollment

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Student)
def log_student_save(sender, instance, created, **kwargs):
    if created:
        logger.info(f"Registered student {instance.student_number}")
    else:
        logger.info(f"Updated student {instance.student_number} at {instance.updated_at.isoformat()}")


@receiver(post_delete, sender=Student)
def log_student_delete(sender, instance, **kwargs):
    """
    Student deletion cascades to addresses, enrollments and program
    memberships; by the time this fires those rows are gone too.
    """
    logger.info(f"Erased student {instance.student_number} and all dependent records")


@receiver(post_save, sender=Enrollment)
def log_enrollment_save(sender, instance, created, **kwargs):
    if created:
        logger.info(f"Enrolled {instance.student.student_number} in {instance.offering}")
    elif instance.grade:
        logger.debug(f"Enrollment {instance.pk} is {instance.status} with grade {instance.grade}")
