from django.conf import settings
from django.db import models


class AuditLog(models.Model):
    """Who graded or (un)published what. Rows are append-only."""

    class Action(models.TextChoices):
        GRADE = 'GRADE', 'Attempt graded'
        PUBLISH = 'PUBLISH', 'Result publication changed'

    actor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='audit_logs')
    action = models.CharField(max_length=20, choices=Action.choices)
    target_model = models.CharField(max_length=50)
    target_object_id = models.CharField(max_length=100, blank=True, null=True)
    details = models.TextField(blank=True)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-timestamp', '-id']
        indexes = [models.Index(fields=['target_model', 'target_object_id'], name='cores_audit_target__idx')]

    def __str__(self):
        return f"{self.actor} {self.action} {self.target_model}#{self.target_object_id}"

    @classmethod
    def record(cls, *, actor, action, target, details=""):
        return cls.objects.create(
            actor=actor,
            action=action,
            target_model=target.__class__.__name__,
            target_object_id=str(target.pk),
            details=details,
        )
