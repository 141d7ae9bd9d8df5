# students/serializers.py
from rest_framework import serializers

from .models import Student, Address, CourseRoster, StudentTranscript, StudentGPA


class AddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = Address
        fields = [
            'id', 'address_type', 'line1', 'line2', 'city', 'state_province',
            'postal_code', 'country', 'is_primary'
        ]
        read_only_fields = ['id']


class StudentSerializer(serializers.ModelSerializer):
    """Student data as accepted from callers; timestamps are server-controlled"""
    full_name = serializers.CharField(read_only=True)
    addresses = AddressSerializer(many=True, read_only=True)

    class Meta:
        model = Student
        fields = [
            'id', 'student_number', 'first_name', 'last_name', 'middle_name', 'full_name',
            'gender', 'date_of_birth', 'email', 'phone', 'addresses',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class CourseRosterSerializer(serializers.ModelSerializer):
    class Meta:
        model = CourseRoster
        fields = [
            'offering', 'course_code', 'course_title', 'term', 'year', 'section',
            'student', 'student_number', 'student_name', 'status', 'grade'
        ]
        read_only_fields = fields


class StudentTranscriptSerializer(serializers.ModelSerializer):
    class Meta:
        model = StudentTranscript
        fields = [
            'student', 'student_number', 'student_name', 'course_code',
            'course_title', 'credits', 'term', 'year', 'grade'
        ]
        read_only_fields = fields


class StudentGPASerializer(serializers.ModelSerializer):
    class Meta:
        model = StudentGPA
        fields = ['student', 'student_number', 'student_name', 'gpa', 'graded_credits']
        read_only_fields = fields
