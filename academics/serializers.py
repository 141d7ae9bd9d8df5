from rest_framework import serializers
from .models import Course, CourseOffering


class CourseSerializer(serializers.ModelSerializer):
    """Serializer for Course"""
    department_code = serializers.CharField(source='department.code', read_only=True, default=None)
    prerequisites = serializers.SlugRelatedField(many=True, read_only=True, slug_field='code')

    class Meta:
        model = Course
        fields = [
            'id', 'code', 'title', 'credits', 'department', 'department_code',
            'description', 'prerequisites'
        ]


class CourseOfferingSerializer(serializers.ModelSerializer):
    """Serializer for Course Offering"""
    course_code = serializers.CharField(source='course.code', read_only=True)
    instructor_name = serializers.SerializerMethodField()
    enrollment_count = serializers.SerializerMethodField()

    class Meta:
        model = CourseOffering
        fields = [
            'id', 'course', 'course_code', 'term', 'year', 'section', 'instructor',
            'instructor_name', 'capacity', 'enrollment_count', 'location',
            'start_date', 'end_date'
        ]

    def get_instructor_name(self, obj):
        if obj.instructor:
            return obj.instructor.get_full_name()
        return ""

    def get_enrollment_count(self, obj):
        return obj.get_enrollment_count()
