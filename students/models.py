# students/models.py
from django.db import models
from django.core.exceptions import ValidationError
from django.utils import timezone

from academics.models import CourseOffering, Program
from .grading import GRADE_POINTS, compute_gpa, normalize_grade
from .managers import StudentQuerySet, EnrollmentQuerySet


class Student(models.Model):
    GENDER_CHOICES = [
        ('F', 'Female'),
        ('M', 'Male'),
        ('X', 'Unspecified'),
    ]

    student_number = models.CharField(max_length=20, unique=True)
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    middle_name = models.CharField(max_length=50, blank=True)
    gender = models.CharField(max_length=1, choices=GENDER_CHOICES, default='X')
    date_of_birth = models.DateField(null=True, blank=True)
    email = models.EmailField(max_length=150, unique=True, null=True, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    programs = models.ManyToManyField(
        Program,
        through='StudentProgram',
        blank=True,
        related_name='students'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    # Stamped on every write; see save() and StudentQuerySet.update()
    updated_at = models.DateTimeField(auto_now=True)

    objects = StudentQuerySet.as_manager()

    class Meta:
        ordering = ['student_number']
        verbose_name = "Student"
        verbose_name_plural = "Students"

    def save(self, *args, **kwargs):
        self.email = self.email or None

        # auto_now only reaches the database when the column is written
        update_fields = kwargs.get('update_fields')
        if update_fields:
            kwargs['update_fields'] = set(update_fields) | {'updated_at'}

        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.full_name} ({self.student_number})"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def get_primary_address(self):
        return self.addresses.filter(is_primary=True).first()

    def get_primary_program(self):
        membership = self.program_memberships.filter(is_primary=True).select_related('program').first()
        return membership.program if membership else None

    def calculate_gpa(self):
        """Credit-weighted GPA computed in Python from this student's enrollments"""
        graded = self.enrollments.graded().values_list('grade', 'offering__course__credits')
        return compute_gpa(graded)


class Address(models.Model):
    ADDRESS_TYPES = [
        ('home', 'Home'),
        ('mailing', 'Mailing'),
        ('billing', 'Billing'),
    ]

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='addresses')
    address_type = models.CharField(max_length=10, choices=ADDRESS_TYPES, default='home')
    line1 = models.CharField(max_length=200)
    line2 = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=100)
    state_province = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=100, default='USA')
    is_primary = models.BooleanField(default=False)

    class Meta:
        ordering = ['student', '-is_primary', 'address_type']
        verbose_name = "Address"
        verbose_name_plural = "Addresses"

    def __str__(self):
        return f"{self.line1}, {self.city} ({self.get_address_type_display()})"


class StudentProgram(models.Model):
    """Membership of a student in a program"""
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='program_memberships')
    program = models.ForeignKey(Program, on_delete=models.CASCADE, related_name='student_memberships')
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    is_primary = models.BooleanField(default=False)

    class Meta:
        unique_together = ('student', 'program')
        verbose_name = "Student Program"
        verbose_name_plural = "Student Programs"

    def clean(self):
        if self.start_date and self.end_date:
            if self.start_date > self.end_date:
                raise ValidationError("Start date cannot be after end date")

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.student.student_number} in {self.program.code}"


class Enrollment(models.Model):
    STATUS_CHOICES = [
        ('enrolled', 'Enrolled'),
        ('dropped', 'Dropped'),
        ('completed', 'Completed'),
        ('withdrawn', 'Withdrawn'),
    ]
    ACTIVE_STATUSES = ('enrolled', 'completed')

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='enrollments')
    offering = models.ForeignKey(CourseOffering, on_delete=models.CASCADE, related_name='enrollments')
    enrollment_date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='enrolled')
    grade = models.CharField(max_length=4, null=True, blank=True, help_text="Final letter grade")

    objects = EnrollmentQuerySet.as_manager()

    class Meta:
        unique_together = ('student', 'offering')
        ordering = ['student', 'offering']
        verbose_name = "Enrollment"
        verbose_name_plural = "Enrollments"
        indexes = [
            models.Index(fields=['status'], name='enrollment_status_idx'),
        ]

    def clean(self):
        self.grade = normalize_grade(self.grade)
        if self.grade is not None and self.grade not in GRADE_POINTS:
            raise ValidationError({
                'grade': f"'{self.grade}' is not a recognised grade; "
                         f"expected one of {', '.join(GRADE_POINTS)}"
            })

        # Checked whenever a row starts holding a seat: on insert, or when a
        # dropped or withdrawn enrollment becomes active again
        if self.status in self.ACTIVE_STATUSES and self.offering_id and not self._held_seat():
            if self.offering.is_full():
                raise ValidationError(f"{self.offering} is full")

    def _held_seat(self):
        """True if the stored row already counts against the offering's capacity"""
        if self._state.adding:
            return False
        stored = Enrollment.objects.filter(pk=self.pk).values_list('status', 'offering_id').first()
        if stored is None:
            return False
        status, offering_id = stored
        return status in self.ACTIVE_STATUSES and offering_id == self.offering_id

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.student.student_number} → {self.offering} ({self.get_status_display()})"

    @property
    def grade_points(self):
        return GRADE_POINTS.get(self.grade)

    @property
    def is_graded(self):
        return self.grade is not None


# Read-only models over the reporting views
from .report_models import CourseRoster, StudentTranscript, StudentGPA
