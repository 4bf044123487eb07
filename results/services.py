# results/services.py
from __future__ import annotations

import logging
from typing import Tuple

from django.db import transaction
from django.utils import timezone

from cores.exceptions import NotFound, Forbidden
from cores.models import AuditLog
from .models import Result

logger = logging.getLogger(__name__)


class ResultService:
    """
    Result materialization and the read/publish side of results.

    Contract:
    - Result is keyed by attempt (one-to-one); upsert never creates a second row.
    - Every scalar field is replaced from the attempt on each grading round.
    """

    @staticmethod
    @transaction.atomic
    def upsert_for_attempt(
        attempt,
        *,
        feedback: str,
        graded_by,
        graded_at,
        remarks: str,
    ) -> Tuple[Result, bool]:
        result, created = Result.objects.update_or_create(
            attempt=attempt,
            defaults={
                "student_id": attempt.student_id,
                "paper_id": attempt.paper_id,
                "total_marks": attempt.total_marks,
                "obtained_marks": attempt.obtained_marks,
                "percentage": attempt.percentage,
                "is_passed": bool(attempt.is_passed),
                "feedback": feedback,
                "graded_by": graded_by,
                "graded_at": graded_at,
                "remarks": remarks,
            },
        )
        logger.info(
            "%s result %s for attempt %s (%s/%s)",
            "Created" if created else "Updated",
            result.pk, attempt.pk, result.obtained_marks, result.total_marks,
        )
        return result, created

    @staticmethod
    def get_result(*, result_id: int, viewer) -> Result:
        result = (
            Result.objects.select_related("student", "paper", "graded_by")
            .filter(pk=result_id)
            .first()
        )
        if result is None:
            raise NotFound("Result not found")
        if viewer.is_student and result.student_id != viewer.pk:
            raise Forbidden("You can only view your own results")
        return result

    @staticmethod
    def student_results(*, student_id: int, viewer):
        if viewer.is_student and int(student_id) != viewer.pk:
            raise Forbidden("You can only view your own results")
        return (
            Result.objects.select_related("paper")
            .filter(student_id=student_id)
            .order_by("-created_at")
        )

    @staticmethod
    def class_results(*, paper_id: int):
        # highest scorer first
        return (
            Result.objects.select_related("student")
            .filter(paper_id=paper_id)
            .order_by("-obtained_marks", "created_at")
        )

    @staticmethod
    @transaction.atomic
    def publish(*, result_id: int, is_published: bool, actor) -> Result:
        result = Result.objects.select_for_update().filter(pk=result_id).first()
        if result is None:
            raise NotFound("Result not found")

        result.set_published(is_published)
        result.graded_by = actor
        result.graded_at = timezone.now()
        result.save(update_fields=["is_published", "published_at", "graded_by", "graded_at", "updated_at"])

        AuditLog.record(
            actor=actor,
            action=AuditLog.Action.PUBLISH,
            target=result,
            details=f"{'Published' if result.is_published else 'Unpublished'} result for attempt {result.attempt_id}",
        )
        logger.info("Result %s is_published=%s by user %s", result.pk, result.is_published, actor.pk)
        return result
