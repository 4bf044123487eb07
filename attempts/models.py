# attempts/models.py
from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from cores.exceptions import InvalidState
from papers.models import Paper, Question


class Attempt(models.Model):
    """One student's run through a paper."""

    class Status(models.TextChoices):
        IN_PROGRESS = "in_progress", "In Progress"
        SUBMITTED = "submitted", "Submitted"              # awaiting manual grading
        AUTO_GRADED = "auto_graded", "Auto Graded"        # every answer scored on submit
        MANUALLY_GRADED = "manually_graded", "Manually Graded"

    # current status -> statuses it may move to
    TRANSITIONS = {
        Status.IN_PROGRESS: {Status.SUBMITTED, Status.AUTO_GRADED},
        Status.SUBMITTED: {Status.MANUALLY_GRADED},
        Status.AUTO_GRADED: {Status.MANUALLY_GRADED},
        Status.MANUALLY_GRADED: {Status.MANUALLY_GRADED},
    }

    GRADABLE_STATUSES = (Status.SUBMITTED, Status.AUTO_GRADED, Status.MANUALLY_GRADED)

    paper = models.ForeignKey(Paper, on_delete=models.CASCADE, related_name='attempts')
    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='attempts')
    attempt_number = models.PositiveIntegerField(help_text="1-based, per student per paper")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.IN_PROGRESS)

    # --- Scoring ---
    total_marks = models.DecimalField(max_digits=7, decimal_places=2, default=0)
    obtained_marks = models.DecimalField(max_digits=7, decimal_places=2, default=0)
    percentage = models.DecimalField(max_digits=6, decimal_places=2, default=0)
    is_passed = models.BooleanField(null=True)

    # --- Grading ---
    graded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='graded_attempts'
    )
    graded_at = models.DateTimeField(null=True, blank=True)
    is_fully_graded = models.BooleanField(default=False)

    start_time = models.DateTimeField(default=timezone.now)
    submit_time = models.DateTimeField(null=True, blank=True)
    time_spent = models.PositiveIntegerField(null=True, blank=True, help_text="minutes")

    class Meta:
        ordering = ['-start_time']
        constraints = [
            models.UniqueConstraint(
                fields=['paper', 'student', 'attempt_number'],
                name='unique_attempt_number_per_student',
            ),
            models.UniqueConstraint(
                fields=['paper', 'student'],
                condition=Q(status='in_progress'),
                name='one_in_progress_attempt_per_student',
            ),
        ]

    def __str__(self):
        return f"{self.student} - {self.paper} #{self.attempt_number}"

    def can_transition_to(self, status):
        return status in self.TRANSITIONS.get(self.status, set())

    def transition_to(self, status):
        if not self.can_transition_to(status):
            raise InvalidState(f"Cannot move attempt from {self.status} to {status}")
        self.status = status

    def apply_score(self, score):
        self.total_marks = score.total_marks
        self.obtained_marks = score.obtained_marks
        self.percentage = score.percentage
        self.is_passed = score.is_passed


class Answer(models.Model):
    class Verdict(models.TextChoices):
        UNGRADED = "ungraded", "Ungraded"
        CORRECT = "correct", "Correct"
        INCORRECT = "incorrect", "Incorrect"

    attempt = models.ForeignKey(Attempt, related_name='answers', on_delete=models.CASCADE)
    question = models.ForeignKey(Question, on_delete=models.CASCADE)

    # Snapshot of the question at attempt start
    question_type = models.CharField(max_length=20, choices=Question.QuestionType.choices)
    max_marks = models.PositiveIntegerField()

    answer = models.TextField(blank=True, default="")  # "" = unanswered

    # Grading
    verdict = models.CharField(max_length=10, choices=Verdict.choices, default=Verdict.UNGRADED)
    obtained_marks = models.DecimalField(max_digits=7, decimal_places=2, default=0)
    auto_graded = models.BooleanField(default=False)
    graded_at = models.DateTimeField(null=True, blank=True)
    feedback = models.TextField(blank=True)  # Feedback from the teacher

    class Meta:
        unique_together = ('attempt', 'question')
        ordering = ['question__order', 'question_id']

    def __str__(self):
        return f"{self.attempt} Q{self.question_id}"

    @property
    def is_correct(self):
        """None while ungraded, else whether the MCQ answer matched."""
        if self.verdict == self.Verdict.UNGRADED:
            return None
        return self.verdict == self.Verdict.CORRECT
