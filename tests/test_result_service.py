from decimal import Decimal

import pytest
from django.utils import timezone

from attempts.services import AttemptService, GradingService
from cores.exceptions import Forbidden, NotFound
from cores.models import AuditLog
from results.models import Result
from results.services import ResultService

pytestmark = pytest.mark.django_db


def _graded(paper, student, teacher, marks):
    AttemptService.start_attempt(paper_id=paper.pk, student=student)
    attempt = AttemptService.submit_attempt(paper_id=paper.pk, student=student, answers=[])
    essay = attempt.answers.get()
    return GradingService.grade_attempt(
        attempt_id=attempt.pk,
        grader=teacher,
        graded_answers=[{"question_id": essay.question_id, "obtained_marks": marks}],
    ).result


@pytest.fixture
def essay_paper(make_paper, student, other_student):
    return make_paper(questions=[("long_answer", 10, None)], assigned=[student, other_student])


def test_upsert_creates_then_replaces(essay_paper, student, teacher):
    AttemptService.start_attempt(paper_id=essay_paper.pk, student=student)
    attempt = AttemptService.submit_attempt(paper_id=essay_paper.pk, student=student, answers=[])
    attempt.obtained_marks = Decimal("4")
    attempt.percentage = Decimal("40.00")
    attempt.is_passed = False

    result, created = ResultService.upsert_for_attempt(
        attempt, feedback="first", graded_by=teacher, graded_at=timezone.now(), remarks="Graded manually"
    )
    assert created is True

    attempt.obtained_marks = Decimal("9")
    attempt.percentage = Decimal("90.00")
    attempt.is_passed = True
    again, created = ResultService.upsert_for_attempt(
        attempt, feedback="second", graded_by=teacher, graded_at=timezone.now(), remarks="Graded manually"
    )

    assert created is False
    assert again.pk == result.pk
    assert Result.objects.count() == 1
    again.refresh_from_db()
    assert again.obtained_marks == Decimal("9")
    assert again.is_passed is True
    assert again.feedback == "second"


def test_class_results_highest_first(essay_paper, student, other_student, teacher):
    _graded(essay_paper, student, teacher, 4)
    _graded(essay_paper, other_student, teacher, 9)

    scores = [r.obtained_marks for r in ResultService.class_results(paper_id=essay_paper.pk)]

    assert scores == [Decimal("9"), Decimal("4")]


def test_students_only_read_their_own_results(essay_paper, student, other_student, teacher):
    mine = _graded(essay_paper, student, teacher, 4)
    theirs = _graded(essay_paper, other_student, teacher, 9)

    assert ResultService.get_result(result_id=mine.pk, viewer=student).pk == mine.pk
    assert ResultService.get_result(result_id=theirs.pk, viewer=teacher).pk == theirs.pk
    with pytest.raises(Forbidden):
        ResultService.get_result(result_id=theirs.pk, viewer=student)
    with pytest.raises(Forbidden):
        ResultService.student_results(student_id=other_student.pk, viewer=student)
    assert list(ResultService.student_results(student_id=student.pk, viewer=student)) == [mine]


def test_missing_result_is_not_found(teacher):
    with pytest.raises(NotFound):
        ResultService.get_result(result_id=31337, viewer=teacher)
    with pytest.raises(NotFound):
        ResultService.publish(result_id=31337, is_published=True, actor=teacher)


def test_publish_and_unpublish(essay_paper, student, teacher):
    result = _graded(essay_paper, student, teacher, 6)

    published = ResultService.publish(result_id=result.pk, is_published=True, actor=teacher)
    assert published.is_published is True
    assert published.published_at is not None
    assert published.graded_by == teacher

    hidden = ResultService.publish(result_id=result.pk, is_published=False, actor=teacher)
    assert hidden.is_published is False
    assert hidden.published_at is None
    assert AuditLog.objects.filter(action="PUBLISH").count() == 2
