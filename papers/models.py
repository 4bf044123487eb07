# papers/models.py
from django.conf import settings
from django.db import models
from django.db.models import Sum
from django.utils import timezone


class Paper(models.Model):
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    subject = models.CharField(max_length=100, blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='created_papers'
    )
    # Students allowed to attempt this paper
    assigned_to = models.ManyToManyField(
        settings.AUTH_USER_MODEL, related_name='assigned_papers', blank=True
    )

    # --- Settings ---
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    max_attempts = models.PositiveIntegerField(default=1)
    total_marks = models.PositiveIntegerField(default=0)
    passing_marks = models.PositiveIntegerField(null=True, blank=True)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    def is_assigned(self, user):
        return self.assigned_to.filter(pk=user.pk).exists()

    def is_open(self, at=None):
        now = at or timezone.now()
        return self.start_time <= now <= self.end_time

    def recalculate_total_marks(self):
        """Authoring-side helper: total_marks = sum of question marks."""
        self.total_marks = self.questions.aggregate(total=Sum('marks'))['total'] or 0
        self.save(update_fields=['total_marks'])
        return self.total_marks


class Question(models.Model):
    class QuestionType(models.TextChoices):
        MCQ = "mcq", "Multiple Choice"
        SHORT_ANSWER = "short_answer", "Short Answer"
        LONG_ANSWER = "long_answer", "Long Answer"

    paper = models.ForeignKey(Paper, related_name='questions', on_delete=models.CASCADE)

    question_type = models.CharField(max_length=20, choices=QuestionType.choices, default=QuestionType.MCQ)
    text = models.TextField()

    # MCQ only: the choices shown and the exact string that scores
    options = models.JSONField(default=list, blank=True)
    correct_answer = models.TextField(blank=True, help_text="Exact (case-sensitive) option text for MCQs")

    marks = models.PositiveIntegerField(default=1)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['order', 'id']

    def __str__(self):
        return f"{self.text[:50]}..."

    @property
    def is_auto_gradable(self):
        return self.question_type == self.QuestionType.MCQ
