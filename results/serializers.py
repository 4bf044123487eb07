from rest_framework import serializers
from .models import Result

class ResultSerializer(serializers.ModelSerializer):
    # Readable names from the related rows
    student_name = serializers.CharField(source='student.get_full_name', read_only=True)
    student_email = serializers.CharField(source='student.email', read_only=True)
    paper_title = serializers.CharField(source='paper.title', read_only=True)
    metadata = serializers.SerializerMethodField()

    class Meta:
        model = Result
        fields = [
            'id',
            'attempt',
            'student',
            'student_name',
            'student_email',
            'paper',
            'paper_title',
            'total_marks',
            'obtained_marks',
            'percentage',
            'is_passed',
            'feedback',
            'metadata',
            'is_published',
            'published_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_metadata(self, obj):
        return {
            'graded_by': obj.graded_by_id,
            'graded_at': obj.graded_at,
            'remarks': obj.remarks,
        }

class PublishResultSerializer(serializers.Serializer):
    is_published = serializers.BooleanField()
