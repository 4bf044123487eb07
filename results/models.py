# results/models.py
from django.conf import settings
from django.db import models
from django.utils import timezone

from attempts.models import Attempt
from papers.models import Paper


class Result(models.Model):
    """
    Durable scoring record of a graded attempt.
    Exactly one per attempt; only the grading workflow writes it.
    """
    attempt = models.OneToOneField(Attempt, on_delete=models.CASCADE, related_name='result')
    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='results')
    paper = models.ForeignKey(Paper, on_delete=models.CASCADE, related_name='results')

    total_marks = models.DecimalField(max_digits=7, decimal_places=2, default=0)
    obtained_marks = models.DecimalField(max_digits=7, decimal_places=2, default=0)
    percentage = models.DecimalField(max_digits=6, decimal_places=2, default=0)
    is_passed = models.BooleanField(default=False)
    feedback = models.TextField(blank=True)

    # --- Metadata ---
    graded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='graded_results'
    )
    graded_at = models.DateTimeField(null=True, blank=True)
    remarks = models.CharField(max_length=255, blank=True)

    # Visibility to the student
    is_published = models.BooleanField(default=False)
    published_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['paper', 'obtained_marks'], name='results_paper_score_idx'),
            models.Index(fields=['student', 'created_at'], name='results_student_crted_idx'),
        ]

    def __str__(self):
        return f"Result {self.pk} for attempt {self.attempt_id}"

    def set_published(self, is_published):
        self.is_published = bool(is_published)
        self.published_at = timezone.now() if self.is_published else None
