# papers/serializers.py
from rest_framework import serializers
from .models import Paper, Question

# --- Question Serializers ---

class QuestionSerializer(serializers.ModelSerializer):
    """Teacher view, includes the answer key."""
    class Meta:
        model = Question
        fields = ['id', 'question_type', 'text', 'options', 'correct_answer', 'marks', 'order']

class StudentQuestionSerializer(serializers.ModelSerializer):
    """Question as shown while taking a paper. Never exposes correct_answer."""
    class Meta:
        model = Question
        fields = ['id', 'question_type', 'text', 'options', 'marks', 'order']

# --- Paper Serializers ---

class PaperListSerializer(serializers.ModelSerializer):
    total_questions = serializers.IntegerField(source='questions.count', read_only=True)

    class Meta:
        model = Paper
        fields = [
            'id', 'title', 'subject', 'start_time', 'end_time',
            'max_attempts', 'total_marks', 'passing_marks', 'total_questions'
        ]

class PaperDetailSerializer(PaperListSerializer):
    questions = QuestionSerializer(many=True, read_only=True)

    class Meta(PaperListSerializer.Meta):
        fields = PaperListSerializer.Meta.fields + ['description', 'created_by', 'assigned_to', 'questions']

class StudentPaperDetailSerializer(PaperListSerializer):
    """Detailed view for students"""
    questions = StudentQuestionSerializer(many=True, read_only=True)

    class Meta(PaperListSerializer.Meta):
        fields = PaperListSerializer.Meta.fields + ['description', 'questions']
