from django.utils import timezone
from rest_framework import serializers

from papers.serializers import PaperListSerializer, StudentQuestionSerializer
from users.serializers import UserSummarySerializer
from .models import Attempt, Answer


class AnswerSerializer(serializers.ModelSerializer):
    question_id = serializers.IntegerField(read_only=True)
    is_correct = serializers.BooleanField(read_only=True, allow_null=True)

    class Meta:
        model = Answer
        fields = [
            'id', 'question_id', 'question_type', 'max_marks', 'answer',
            'verdict', 'is_correct', 'obtained_marks', 'auto_graded', 'graded_at', 'feedback'
        ]
        read_only_fields = fields


class AttemptSerializer(serializers.ModelSerializer):
    """Lightweight serializer for lists / history."""
    paper = PaperListSerializer(read_only=True)
    student = UserSummarySerializer(read_only=True)
    answers = AnswerSerializer(many=True, read_only=True)
    scoring = serializers.SerializerMethodField()
    grading = serializers.SerializerMethodField()

    class Meta:
        model = Attempt
        fields = [
            'id', 'paper', 'student', 'attempt_number', 'status', 'answers',
            'scoring', 'grading', 'start_time', 'submit_time', 'time_spent'
        ]
        read_only_fields = fields

    def get_scoring(self, obj):
        return {
            'total_marks': obj.total_marks,
            'obtained_marks': obj.obtained_marks,
            'percentage': obj.percentage,
            'is_passed': obj.is_passed,
        }

    def get_grading(self, obj):
        return {
            'graded_by': obj.graded_by_id,
            'graded_at': obj.graded_at,
            'is_fully_graded': obj.is_fully_graded,
        }


class ActiveAttemptSerializer(AttemptSerializer):
    """Heavy serializer for taking the paper. Includes QUESTIONS, never the answer key."""
    questions = StudentQuestionSerializer(source='paper.questions', many=True, read_only=True)
    time_remaining_seconds = serializers.SerializerMethodField()

    class Meta(AttemptSerializer.Meta):
        fields = AttemptSerializer.Meta.fields + ['questions', 'time_remaining_seconds']

    def get_time_remaining_seconds(self, obj):
        if obj.status != Attempt.Status.IN_PROGRESS:
            return 0
        return max(0, int((obj.paper.end_time - timezone.now()).total_seconds()))


# --- Input payloads ---

class AnswerSubmitSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    # Kept verbatim; MCQ marking is an exact comparison
    answer = serializers.CharField(allow_blank=True, allow_null=True, required=False, default="", trim_whitespace=False)


class AttemptSubmitSerializer(serializers.Serializer):
    answers = AnswerSubmitSerializer(many=True)


class GradedAnswerSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    obtained_marks = serializers.DecimalField(max_digits=7, decimal_places=2)
    feedback = serializers.CharField(allow_blank=True, required=False, default="")


class GradeAttemptSerializer(serializers.Serializer):
    graded_answers = GradedAnswerSerializer(many=True)
