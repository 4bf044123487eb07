# attempts/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from cores.exceptions import Forbidden, InvalidState, NotFound
from cores.models import AuditLog
from papers.models import Paper, Question
from results.models import Result
from results.services import ResultService

from . import scoring
from .models import Answer, Attempt

logger = logging.getLogger(__name__)

MANUAL_GRADING_REMARKS = "Graded manually"


class AttemptService:
    """
    Student side of the attempt lifecycle: start and submit.

    Every rule is checked before the first write; a failed check leaves
    the store untouched.
    """

    @staticmethod
    @transaction.atomic
    def start_attempt(*, paper_id: int, student) -> Tuple[Attempt, bool]:
        """
        returns:
          (attempt, created). created is False when an in-progress
          attempt is resumed instead of opening a new one.
        """
        # Row lock serializes concurrent starts on the same paper
        paper = Paper.objects.select_for_update().filter(pk=paper_id).first()
        if paper is None:
            raise NotFound("Paper not found")

        if not paper.is_assigned(student):
            logger.warning("Student %s tried to start unassigned paper %s", student.pk, paper.pk)
            raise Forbidden("You are not assigned to this paper")

        now = timezone.now()
        if not paper.is_open(now):
            raise InvalidState("Paper is not active at this time")

        attempts = Attempt.objects.filter(paper=paper, student=student)

        active = attempts.filter(status=Attempt.Status.IN_PROGRESS).first()
        if active is not None:
            logger.info("Resuming attempt %s for student %s", active.pk, student.pk)
            return active, False

        prior_count = attempts.count()
        if prior_count >= paper.max_attempts:
            raise InvalidState("Maximum attempts reached")

        questions = list(paper.questions.all())
        try:
            with transaction.atomic():
                attempt = Attempt.objects.create(
                    paper=paper,
                    student=student,
                    attempt_number=prior_count + 1,
                    status=Attempt.Status.IN_PROGRESS,
                    total_marks=paper.total_marks,
                    start_time=now,
                )
                Answer.objects.bulk_create([
                    Answer(
                        attempt=attempt,
                        question=q,
                        question_type=q.question_type,
                        max_marks=q.marks,
                        answer="",
                    )
                    for q in questions
                ])
        except IntegrityError:
            # Unique constraints catch a concurrent start the row lock did not serialize
            raise InvalidState("An attempt is already in progress")

        logger.info(
            "Started attempt %s (#%s) on paper %s for student %s",
            attempt.pk, attempt.attempt_number, paper.pk, student.pk,
        )
        return attempt, True

    @staticmethod
    @transaction.atomic
    def submit_attempt(*, paper_id: int, student, answers: List[Dict[str, Any]]) -> Attempt:
        """
        answers: [{"question_id": ..., "answer": "..."}]
        """
        attempt = (
            Attempt.objects.select_for_update()
            .filter(paper_id=paper_id, student=student, status=Attempt.Status.IN_PROGRESS)
            .first()
        )
        if attempt is None:
            raise NotFound("No in-progress attempt found")

        paper = Paper.objects.filter(pk=paper_id).first()
        if paper is None:
            raise NotFound("Paper not found")

        # First entry per question wins; unknown question ids are ignored
        submitted: Dict[str, str] = {}
        for entry in answers:
            submitted.setdefault(str(entry.get("question_id")), entry.get("answer") or "")

        questions: Dict[int, Question] = {q.pk: q for q in paper.questions.all()}
        stored = list(attempt.answers.all())
        now = timezone.now()

        for ans in stored:
            key = str(ans.question_id)
            if key not in submitted:
                continue
            ans.answer = submitted[key]

            # Auto-grade MCQs
            if ans.question_type == Question.QuestionType.MCQ:
                question = questions.get(ans.question_id)
                if question is not None:
                    correct = ans.answer == question.correct_answer
                    ans.verdict = Answer.Verdict.CORRECT if correct else Answer.Verdict.INCORRECT
                    ans.obtained_marks = question.marks if correct else 0
                    ans.auto_graded = True
                    ans.graded_at = now

        Answer.objects.bulk_update(
            stored, ["answer", "verdict", "obtained_marks", "auto_graded", "graded_at"]
        )

        attempt.apply_score(
            scoring.score_on_submit(
                (a.obtained_marks for a in stored),
                total_marks=paper.total_marks,
                passing_marks=paper.passing_marks,
            )
        )

        fully_scored = all(a.verdict != Answer.Verdict.UNGRADED for a in stored)
        attempt.transition_to(
            Attempt.Status.AUTO_GRADED if fully_scored else Attempt.Status.SUBMITTED
        )
        attempt.submit_time = now
        attempt.time_spent = scoring.minutes_between(attempt.start_time, now)
        attempt.save()

        logger.info(
            "Attempt %s submitted: %s/%s (%s%%), status=%s",
            attempt.pk, attempt.obtained_marks, attempt.total_marks, attempt.percentage, attempt.status,
        )
        return attempt


@dataclass
class GradingOutcome:
    attempt: Attempt
    result: Result
    created: bool


class GradingService:
    """
    Teacher side: manual marks overlaid on a submitted attempt, then the
    Result is materialized. Re-grading is allowed and overwrites.
    """

    @staticmethod
    def _validate_marks(answers_by_question: Dict[str, Answer], graded_answers) -> None:
        for entry in graded_answers:
            ans = answers_by_question.get(str(entry.get("question_id")))
            if ans is None:
                continue
            marks = scoring.to_decimal(entry.get("obtained_marks"))
            if marks < 0 or marks > ans.max_marks:
                raise InvalidState(
                    f"Marks for question {ans.question_id} must be between 0 and {ans.max_marks}"
                )

    @staticmethod
    @transaction.atomic
    def grade_attempt(*, attempt_id: int, grader, graded_answers: List[Dict[str, Any]]) -> GradingOutcome:
        """
        graded_answers: [{"question_id": ..., "obtained_marks": ..., "feedback": "..."}]
        """
        attempt = Attempt.objects.select_for_update().filter(pk=attempt_id).first()
        if attempt is None:
            raise NotFound("Attempt not found")

        if attempt.status not in Attempt.GRADABLE_STATUSES:
            raise InvalidState("Attempt has not been submitted yet")

        stored = list(attempt.answers.all())
        by_question = {str(a.question_id): a for a in stored}
        GradingService._validate_marks(by_question, graded_answers)

        now = timezone.now()
        for entry in graded_answers:
            ans = by_question.get(str(entry.get("question_id")))
            if ans is None:
                continue
            ans.obtained_marks = scoring.to_decimal(entry.get("obtained_marks"))
            ans.feedback = entry.get("feedback") or ""
            ans.auto_graded = False
            ans.graded_at = now

        Answer.objects.bulk_update(stored, ["obtained_marks", "feedback", "auto_graded", "graded_at"])

        attempt.apply_score(
            scoring.score_on_manual_grade(
                (a.obtained_marks for a in stored),
                total_marks=attempt.total_marks,
                pass_percentage=settings.MANUAL_GRADING_PASS_PERCENTAGE,
            )
        )
        attempt.transition_to(Attempt.Status.MANUALLY_GRADED)
        attempt.graded_by = grader
        attempt.graded_at = now
        attempt.is_fully_graded = True
        attempt.save()

        feedback = "; ".join(e.get("feedback") for e in graded_answers if e.get("feedback"))
        result, created = ResultService.upsert_for_attempt(
            attempt,
            feedback=feedback,
            graded_by=grader,
            graded_at=now,
            remarks=MANUAL_GRADING_REMARKS,
        )

        AuditLog.record(
            actor=grader,
            action=AuditLog.Action.GRADE,
            target=attempt,
            details=f"Graded attempt {attempt.pk}: {attempt.obtained_marks}/{attempt.total_marks}",
        )
        logger.info(
            "Attempt %s graded by %s: %s/%s (%s%%) passed=%s",
            attempt.pk, grader.pk, attempt.obtained_marks, attempt.total_marks,
            attempt.percentage, attempt.is_passed,
        )
        return GradingOutcome(attempt=attempt, result=result, created=created)
