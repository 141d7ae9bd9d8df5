from datetime import date

from django.core.management.base import BaseCommand
from django.db import transaction

from academics.models import Department, Program, Instructor, Course, CourseOffering
from students.models import Student, Enrollment
from students.services import registration_service

DEPARTMENTS = [
    {'code': 'CS', 'name': 'Computer Science'},
    {'code': 'MATH', 'name': 'Mathematics'},
    {'code': 'ENG', 'name': 'English'},
]

PROGRAMS = [
    {'code': 'BSC-CS', 'name': 'BSc Computer Science', 'dept': 'CS', 'level': 'Undergraduate'},
    {'code': 'BSC-MATH', 'name': 'BSc Mathematics', 'dept': 'MATH', 'level': 'Undergraduate'},
]

INSTRUCTORS = [
    {'employee_number': 'EMP1001', 'first_name': 'Laura', 'last_name': 'Adams',
     'email': 'laura.adams@university.edu', 'dept': 'CS', 'hire_date': date(2015, 8, 1)},
    {'employee_number': 'EMP1002', 'first_name': 'Daniel', 'last_name': 'Khan',
     'email': 'daniel.khan@university.edu', 'dept': 'CS', 'hire_date': date(2019, 2, 15)},
]

COURSES = [
    {'code': 'CS101', 'title': 'Introduction to Computer Science', 'credits': 3, 'dept': 'CS',
     'description': 'Fundamentals of programming and computing.'},
    {'code': 'CS102', 'title': 'Data Structures', 'credits': 3, 'dept': 'CS',
     'description': 'Core data structures and algorithms.'},
    {'code': 'CS201', 'title': 'Database Fundamentals', 'credits': 3, 'dept': 'CS',
     'description': 'Relational databases, SQL and design.'},
    {'code': 'MATH101', 'title': 'Calculus I', 'credits': 4, 'dept': 'MATH',
     'description': 'Limits, derivatives, integrals.'},
]

# (course, prerequisite)
PREREQUISITES = [
    ('CS102', 'CS101'),
    ('CS201', 'CS102'),
]

OFFERINGS = [
    {'course': 'CS101', 'instructor': 'EMP1001', 'capacity': 50, 'location': 'Building 1, Room 101'},
    {'course': 'CS201', 'instructor': 'EMP1002', 'capacity': 40, 'location': 'Building 2, Room 201'},
    {'course': 'MATH101', 'instructor': 'EMP1002', 'capacity': 30, 'location': 'Building 3, Room 301'},
]
FALL_2023 = {'term': 'Fall', 'year': 2023, 'section': 'A',
             'start_date': date(2023, 9, 1), 'end_date': date(2023, 12, 15)}

STUDENTS = [
    {'student_number': 'S2023001', 'first_name': 'Alice', 'last_name': 'Smith', 'date_of_birth': '2000-01-15',
     'email': 'alice.smith@example.com', 'phone': '+1-555-0101', 'line1': '123 Maple St', 'postal_code': '62701',
     'program': 'BSC-CS'},
    {'student_number': 'S2023002', 'first_name': 'Bob', 'last_name': 'Johnson', 'date_of_birth': '2002-05-20',
     'email': 'bob.johnson@example.com', 'phone': '+1-555-0102', 'line1': '456 Oak Ave', 'postal_code': '62702',
     'program': 'BSC-CS'},
    {'student_number': 'S2023003', 'first_name': 'Joy', 'last_name': 'Gray', 'date_of_birth': '2004-06-18',
     'email': 'joy.gray@example.com', 'phone': '+1-555-0103', 'line1': '789 Pine Rd', 'postal_code': '62703',
     'program': None},
    {'student_number': 'S2023004', 'first_name': 'Mike', 'last_name': 'White', 'date_of_birth': '2006-02-24',
     'email': 'mike.white@example.com', 'phone': '+1-555-0104', 'line1': '101 Elm St', 'postal_code': '62704',
     'program': None},
    {'student_number': 'S2023005', 'first_name': 'Lina', 'last_name': 'Martinez', 'date_of_birth': '2001-11-05',
     'email': 'lina.martinez@example.com', 'phone': '+1-555-0105', 'line1': '12 Cedar Lane', 'postal_code': '62705',
     'program': 'BSC-CS'},
    {'student_number': 'S2023006', 'first_name': 'Ethan', 'last_name': 'Brown', 'date_of_birth': '1999-03-12',
     'email': 'ethan.brown@example.com', 'phone': '+1-555-0106', 'line1': '34 Birch Blvd', 'postal_code': '62706',
     'program': 'BSC-MATH'},
    {'student_number': 'S2023007', 'first_name': 'Priya', 'last_name': 'Singh', 'date_of_birth': '2003-07-30',
     'email': 'priya.singh@example.com', 'phone': '+1-555-0107', 'line1': '56 Walnut Way', 'postal_code': '62707',
     'program': 'BSC-CS'},
]

# (student, course, enrollment date, final grade)
ENROLLMENTS = [
    ('S2023001', 'CS101', date(2023, 9, 1), 'A'),
    ('S2023002', 'CS201', date(2023, 9, 1), 'B+'),
    ('S2023005', 'CS101', date(2023, 9, 2), 'B'),
    ('S2023006', 'MATH101', date(2023, 9, 2), 'A-'),
    ('S2023007', 'CS201', date(2023, 9, 2), 'B'),
]


class Command(BaseCommand):
    help = 'Load the sample departments, courses, students and graded enrollments'

    def add_arguments(self, parser):
        parser.add_argument(
            '--flush',
            action='store_true',
            help='Delete all students and academic reference data before loading',
        )

    def handle(self, *args, **options):
        with transaction.atomic():
            if options['flush']:
                self.flush()
            self.load_reference_data()
            self.load_students()
            self.load_enrollments()

        self.stdout.write(self.style.SUCCESS(
            f"Sample records ready: {Department.objects.count()} departments, "
            f"{Course.objects.count()} courses, {CourseOffering.objects.count()} offerings, "
            f"{Student.objects.count()} students, {Enrollment.objects.count()} enrollments"
        ))

    def flush(self):
        # Students first: their cascade clears enrollments before offerings go
        Student.objects.all().delete()
        Course.objects.all().delete()
        Instructor.objects.all().delete()
        Program.objects.all().delete()
        Department.objects.all().delete()
        self.stdout.write('Flushed existing records')

    def load_reference_data(self):
        departments = {}
        for dept_data in DEPARTMENTS:
            department, created = Department.objects.get_or_create(
                code=dept_data['code'],
                defaults={'name': dept_data['name']}
            )
            departments[department.code] = department
            if created:
                self.stdout.write(f'Created department: {department}')

        for prog_data in PROGRAMS:
            program, created = Program.objects.get_or_create(
                code=prog_data['code'],
                defaults={
                    'name': prog_data['name'],
                    'department': departments[prog_data['dept']],
                    'level': prog_data['level'],
                }
            )
            if created:
                self.stdout.write(f'Created program: {program}')

        for inst_data in INSTRUCTORS:
            inst_data = dict(inst_data)
            department = departments[inst_data.pop('dept')]
            instructor, created = Instructor.objects.get_or_create(
                employee_number=inst_data.pop('employee_number'),
                defaults={**inst_data, 'department': department}
            )
            if created:
                self.stdout.write(f'Created instructor: {instructor}')

        for course_data in COURSES:
            course_data = dict(course_data)
            department = departments[course_data.pop('dept')]
            course, created = Course.objects.get_or_create(
                code=course_data.pop('code'),
                defaults={**course_data, 'department': department}
            )
            if created:
                self.stdout.write(f'Created course: {course}')

        for course_code, prereq_code in PREREQUISITES:
            course = Course.objects.get(code=course_code)
            course.add_prerequisite(Course.objects.get(code=prereq_code))

        for offering_data in OFFERINGS:
            offering, created = CourseOffering.objects.get_or_create(
                course=Course.objects.get(code=offering_data['course']),
                term=FALL_2023['term'],
                year=FALL_2023['year'],
                section=FALL_2023['section'],
                defaults={
                    'instructor': Instructor.objects.get(employee_number=offering_data['instructor']),
                    'capacity': offering_data['capacity'],
                    'location': offering_data['location'],
                    'start_date': FALL_2023['start_date'],
                    'end_date': FALL_2023['end_date'],
                }
            )
            if created:
                self.stdout.write(f'Created offering: {offering}')

    def load_students(self):
        for student_data in STUDENTS:
            if Student.objects.filter(student_number=student_data['student_number']).exists():
                continue

            student_data = dict(student_data)
            address = {
                'address_type': 'home',
                'line1': student_data.pop('line1'),
                'city': 'Springfield',
                'state_province': 'IL',
                'postal_code': student_data.pop('postal_code'),
                'country': 'USA',
                'is_primary': True,
            }
            program_code = student_data.pop('program')
            programs = []
            if program_code:
                programs.append({'program': program_code, 'start_date': date(2023, 8, 15), 'is_primary': True})

            student = registration_service.register_student(student_data, [address], programs)
            self.stdout.write(f'Registered student: {student}')

    def load_enrollments(self):
        for student_number, course_code, enrolled_on, grade in ENROLLMENTS:
            student = Student.objects.get(student_number=student_number)
            offering = CourseOffering.objects.get(
                course__code=course_code,
                term=FALL_2023['term'],
                year=FALL_2023['year'],
                section=FALL_2023['section'],
            )

            enrollment = Enrollment.objects.filter(student=student, offering=offering).first()
            if enrollment is None:
                enrollment = registration_service.enroll(student, offering, enrollment_date=enrolled_on)
                self.stdout.write(f'Enrolled {student_number} in {course_code}')

            if enrollment.grade != grade:
                registration_service.record_grade(enrollment, grade)
