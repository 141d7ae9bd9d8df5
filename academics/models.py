# academics/models.py
from django.db import models
from django.db.models import F, Q
from django.core.exceptions import ValidationError


class Department(models.Model):
    """Academic department owning programs, instructors and courses"""
    code = models.CharField(max_length=10, unique=True, help_text="Department code (e.g., CS, MATH)")
    name = models.CharField(max_length=150)

    class Meta:
        ordering = ['code']
        verbose_name = "Department"
        verbose_name_plural = "Departments"

    def __str__(self):
        return f"{self.code} - {self.name}"


class Program(models.Model):
    """Degree program offered by a department"""
    LEVEL_CHOICES = [
        ('Undergraduate', 'Undergraduate'),
        ('Postgraduate', 'Postgraduate'),
        ('Doctoral', 'Doctoral'),
    ]

    code = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=200)
    # A department cannot be removed while it still runs programs
    department = models.ForeignKey(Department, on_delete=models.RESTRICT, related_name='programs')
    level = models.CharField(max_length=20, choices=LEVEL_CHOICES, default='Undergraduate')

    class Meta:
        ordering = ['code']
        verbose_name = "Program"
        verbose_name_plural = "Programs"

    def __str__(self):
        return f"{self.code} - {self.name}"


class Instructor(models.Model):
    employee_number = models.CharField(max_length=20, unique=True, null=True, blank=True)
    first_name = models.CharField(max_length=80)
    last_name = models.CharField(max_length=80)
    email = models.EmailField(max_length=150, unique=True, null=True, blank=True)
    department = models.ForeignKey(
        Department,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='instructors'
    )
    hire_date = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ['last_name', 'first_name']
        verbose_name = "Instructor"
        verbose_name_plural = "Instructors"

    def save(self, *args, **kwargs):
        # Blank optional identifiers are stored as NULL so they never collide
        self.employee_number = self.employee_number or None
        self.email = self.email or None
        super().save(*args, **kwargs)

    def __str__(self):
        return self.get_full_name()

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip()


class Course(models.Model):
    """Course in the catalog with a globally unique code"""
    code = models.CharField(max_length=20, unique=True, help_text="Globally unique course code")
    title = models.CharField(max_length=200)
    credits = models.PositiveSmallIntegerField()
    department = models.ForeignKey(
        Department,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='courses'
    )
    description = models.TextField(blank=True)
    prerequisites = models.ManyToManyField(
        'self',
        through='CoursePrerequisite',
        through_fields=('course', 'prerequisite'),
        symmetrical=False,
        blank=True,
        related_name='required_by'
    )

    class Meta:
        ordering = ['code']
        verbose_name = "Course"
        verbose_name_plural = "Courses"
        constraints = [
            models.CheckConstraint(condition=Q(credits__gt=0), name='course_credits_positive'),
        ]

    def clean(self):
        if self.credits is not None and self.credits <= 0:
            raise ValidationError("Credits must be greater than zero")

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.code} - {self.title}"

    def add_prerequisite(self, other):
        """Link `other` as a prerequisite, validating self-reference and cycles.

        ``prerequisites.add()`` bulk-inserts through rows without calling
        ``save()``, so it skips the cycle check; use this instead.
        """
        link, _ = CoursePrerequisite.objects.get_or_create(course=self, prerequisite=other)
        return link

    def get_all_prerequisites(self):
        """Return every course this course requires, directly or transitively"""
        seen = set()
        frontier = [self.pk]
        while frontier:
            ids = CoursePrerequisite.objects.filter(
                course_id__in=frontier
            ).values_list('prerequisite_id', flat=True)
            frontier = [pk for pk in ids if pk not in seen]
            seen.update(frontier)
        return Course.objects.filter(pk__in=seen)

    def requires(self, other):
        """True if `other` is a direct or transitive prerequisite of this course"""
        return self.get_all_prerequisites().filter(pk=other.pk).exists()


class CoursePrerequisite(models.Model):
    """Directed link: `course` requires `prerequisite`"""
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='prerequisite_links')
    prerequisite = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='dependent_links')

    class Meta:
        unique_together = ('course', 'prerequisite')
        verbose_name = "Course Prerequisite"
        verbose_name_plural = "Course Prerequisites"
        constraints = [
            models.CheckConstraint(
                condition=~Q(course=F('prerequisite')),
                name='course_prerequisite_not_self',
            ),
        ]

    def clean(self):
        # Missing ends are reported by field validation
        if not (self.course_id and self.prerequisite_id):
            return

        if self.course_id == self.prerequisite_id:
            raise ValidationError("A course cannot be its own prerequisite")

        # The new edge closes a cycle if the prerequisite already needs the course
        if self.prerequisite.requires(self.course):
            raise ValidationError(
                f"{self.prerequisite.code} already requires {self.course.code}; "
                f"adding it as a prerequisite would create a cycle"
            )

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.course.code} requires {self.prerequisite.code}"


class CourseOffering(models.Model):
    """A scheduled instance of a course in a term, year and section"""
    ACTIVE_STATUSES = ('enrolled', 'completed')

    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='offerings')
    instructor = models.ForeignKey(
        Instructor,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='offerings'
    )
    term = models.CharField(max_length=20, help_text="e.g., Fall, Spring")
    year = models.PositiveSmallIntegerField()
    section = models.CharField(max_length=10, default='A')
    capacity = models.PositiveSmallIntegerField(default=0, help_text="0 means no enrollment limit")
    location = models.CharField(max_length=100, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)

    class Meta:
        unique_together = ('course', 'term', 'year', 'section')
        ordering = ['year', 'term', 'course', 'section']
        verbose_name = "Course Offering"
        verbose_name_plural = "Course Offerings"

    def clean(self):
        if self.start_date and self.end_date:
            if self.start_date > self.end_date:
                raise ValidationError("Start date cannot be after end date")

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.course.code} {self.term} {self.year} ({self.section})"

    def get_enrollment_count(self):
        """Count enrollments that still hold a seat"""
        return self.enrollments.filter(status__in=self.ACTIVE_STATUSES).count()

    def is_full(self):
        """Check if the offering reached its capacity"""
        if not self.capacity:
            return False
        return self.get_enrollment_count() >= self.capacity
