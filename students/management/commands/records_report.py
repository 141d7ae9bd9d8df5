from django.core.management.base import BaseCommand, CommandError
from rest_framework.renderers import JSONRenderer

from academics.models import Course, CourseOffering
from academics.serializers import CourseSerializer, CourseOfferingSerializer
from students.models import Student, CourseRoster, StudentTranscript, StudentGPA
from students.serializers import (
    CourseRosterSerializer, StudentTranscriptSerializer, StudentGPASerializer
)

REPORTS = {
    'roster': {
        'serializer': CourseRosterSerializer,
        'columns': ['course_code', 'term', 'year', 'section', 'student_number', 'student_name', 'status', 'grade'],
    },
    'transcript': {
        'serializer': StudentTranscriptSerializer,
        'columns': ['student_number', 'student_name', 'course_code', 'course_title', 'credits', 'term', 'year', 'grade'],
    },
    'gpa': {
        'serializer': StudentGPASerializer,
        'columns': ['student_number', 'student_name', 'graded_credits', 'gpa'],
    },
    'catalog': {
        'serializer': CourseSerializer,
        'columns': ['code', 'title', 'credits', 'department_code', 'prerequisites'],
    },
    'offerings': {
        'serializer': CourseOfferingSerializer,
        'columns': ['course_code', 'term', 'year', 'section', 'instructor_name', 'capacity', 'enrollment_count', 'location'],
    },
}


class Command(BaseCommand):
    help = 'Print the course roster, student transcripts, GPAs, course catalog or offerings'

    def add_arguments(self, parser):
        parser.add_argument('report', choices=sorted(REPORTS), help='Report to print')
        parser.add_argument('--student', help='Restrict to one student number')
        parser.add_argument('--course', help='Restrict to one course code')
        parser.add_argument('--term', help='Restrict to a term, e.g. Fall')
        parser.add_argument('--year', type=int, help='Restrict to an academic year')
        parser.add_argument(
            '--format',
            choices=['table', 'json'],
            default='table',
            help='Output format (default: table)',
        )

    def handle(self, *args, **options):
        report = options['report']
        self.check_filters(options)

        queryset = getattr(self, f'{report}_queryset')(options)
        data = REPORTS[report]['serializer'](queryset, many=True).data

        if options['format'] == 'json':
            rendered = JSONRenderer().render(data, renderer_context={'indent': 2})
            self.stdout.write(rendered.decode('utf-8'))
        else:
            self.stdout.write(render_table(data, REPORTS[report]['columns']))

    def check_filters(self, options):
        if options['student'] and not Student.objects.filter(student_number=options['student']).exists():
            raise CommandError(f"Student {options['student']} does not exist")
        if options['course'] and not Course.objects.filter(code=options['course']).exists():
            raise CommandError(f"Course {options['course']} does not exist")

    def _term_filters(self, options, prefix=''):
        filters = {}
        if options['term']:
            filters[f'{prefix}term'] = options['term']
        if options['year']:
            filters[f'{prefix}year'] = options['year']
        return filters

    def roster_queryset(self, options):
        queryset = CourseRoster.objects.filter(**self._term_filters(options))
        if options['course']:
            queryset = queryset.filter(course_code=options['course'])
        if options['student']:
            queryset = queryset.filter(student_number=options['student'])
        return queryset

    def transcript_queryset(self, options):
        queryset = StudentTranscript.objects.filter(**self._term_filters(options))
        if options['course']:
            queryset = queryset.filter(course_code=options['course'])
        if options['student']:
            queryset = queryset.filter(student_number=options['student'])
        return queryset

    def gpa_queryset(self, options):
        queryset = StudentGPA.objects.all()
        if options['student']:
            queryset = queryset.filter(student_number=options['student'])
        return queryset

    def catalog_queryset(self, options):
        queryset = Course.objects.select_related('department').prefetch_related('prerequisites')
        if options['course']:
            queryset = queryset.filter(code=options['course'])
        return queryset

    def offerings_queryset(self, options):
        queryset = CourseOffering.objects.select_related('course', 'instructor').filter(
            **self._term_filters(options)
        )
        if options['course']:
            queryset = queryset.filter(course__code=options['course'])
        return queryset


def _cell(value):
    if value is None or value == '':
        return '-'
    if isinstance(value, (list, tuple)):
        return ', '.join(str(v) for v in value) or '-'
    return str(value)


def render_table(rows, columns):
    """Plain-text table with one header line; empty reports print a notice"""
    if not rows:
        return 'No rows.'

    cells = [[_cell(row.get(column)) for column in columns] for row in rows]
    widths = [
        max(len(column), *(len(line[i]) for line in cells))
        for i, column in enumerate(columns)
    ]

    def fmt(values):
        return '  '.join(value.ljust(width) for value, width in zip(values, widths)).rstrip()

    lines = [fmt(columns), fmt('-' * width for width in widths)]
    lines.extend(fmt(line) for line in cells)
    return '\n'.join(lines)
