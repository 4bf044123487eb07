from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from attempts.models import Answer, Attempt
from attempts.services import AttemptService
from cores.exceptions import Forbidden, InvalidState, NotFound

pytestmark = pytest.mark.django_db


def _submit(paper, student, answers):
    return AttemptService.submit_attempt(paper_id=paper.pk, student=student, answers=answers)


# --- start_attempt ---

def test_start_creates_attempt_with_blank_answers(make_paper, student):
    paper = make_paper(assigned=[student])

    attempt, created = AttemptService.start_attempt(paper_id=paper.pk, student=student)

    assert created is True
    assert attempt.status == Attempt.Status.IN_PROGRESS
    assert attempt.attempt_number == 1
    assert attempt.total_marks == Decimal("10")
    answers = list(attempt.answers.all())
    assert len(answers) == 2
    for ans in answers:
        assert ans.answer == ""
        assert ans.is_correct is None
        assert ans.obtained_marks == 0
        assert ans.max_marks == 5


def test_start_unknown_paper_is_not_found(student):
    with pytest.raises(NotFound):
        AttemptService.start_attempt(paper_id=999999, student=student)


def test_start_requires_assignment(make_paper, student, other_student):
    paper = make_paper(assigned=[student])

    with pytest.raises(Forbidden):
        AttemptService.start_attempt(paper_id=paper.pk, student=other_student)
    assert not Attempt.objects.exists()


def test_assignment_is_checked_before_time_window(make_paper, other_student):
    paper = make_paper(opens_in=timedelta(days=1), closes_in=timedelta(days=2))

    with pytest.raises(Forbidden):
        AttemptService.start_attempt(paper_id=paper.pk, student=other_student)


@pytest.mark.parametrize(
    "opens_in, closes_in",
    [
        (timedelta(hours=1), timedelta(hours=2)),     # not open yet
        (timedelta(hours=-2), timedelta(hours=-1)),   # already closed
    ],
)
def test_start_outside_window_is_invalid_state(make_paper, student, opens_in, closes_in):
    paper = make_paper(assigned=[student], opens_in=opens_in, closes_in=closes_in)

    with pytest.raises(InvalidState) as exc:
        AttemptService.start_attempt(paper_id=paper.pk, student=student)
    assert "not active" in str(exc.value.detail)


def test_start_resumes_in_progress_attempt(make_paper, student):
    paper = make_paper(assigned=[student], max_attempts=3)

    first, _ = AttemptService.start_attempt(paper_id=paper.pk, student=student)
    again, created = AttemptService.start_attempt(paper_id=paper.pk, student=student)

    assert created is False
    assert again.pk == first.pk
    assert Attempt.objects.filter(paper=paper, student=student).count() == 1


def test_max_attempts_reached_after_full_cycles(make_paper, student):
    paper = make_paper(assigned=[student], max_attempts=2)

    for number in (1, 2):
        attempt, created = AttemptService.start_attempt(paper_id=paper.pk, student=student)
        assert created and attempt.attempt_number == number
        _submit(paper, student, [])

    with pytest.raises(InvalidState) as exc:
        AttemptService.start_attempt(paper_id=paper.pk, student=student)
    assert "Maximum attempts reached" in str(exc.value.detail)


def test_one_in_progress_attempt_is_enforced_by_the_database(make_paper, student):
    from django.db import IntegrityError, transaction

    paper = make_paper(assigned=[student], max_attempts=3)
    AttemptService.start_attempt(paper_id=paper.pk, student=student)

    with pytest.raises(IntegrityError), transaction.atomic():
        Attempt.objects.create(paper=paper, student=student, attempt_number=2)


def test_concurrent_start_losing_the_insert_is_invalid_state(make_paper, student, monkeypatch):
    paper = make_paper(assigned=[student], max_attempts=3)
    create = Attempt.objects.create

    def create_after_competing_request(**kwargs):
        # another request commits the same attempt first
        create(**kwargs)
        return create(**kwargs)

    monkeypatch.setattr(Attempt.objects, "create", create_after_competing_request)

    with pytest.raises(InvalidState, match="An attempt is already in progress"):
        AttemptService.start_attempt(paper_id=paper.pk, student=student)

    assert not Attempt.objects.filter(paper=paper).exists()
    assert not Answer.objects.filter(attempt__paper=paper).exists()


# --- submit_attempt ---

@pytest.mark.parametrize(
    "submitted, verdict, marks",
    [
        ("B", Answer.Verdict.CORRECT, 5),
        ("A", Answer.Verdict.INCORRECT, 0),
        ("b", Answer.Verdict.INCORRECT, 0),   # case-sensitive
    ],
)
def test_mcq_auto_grading(make_paper, student, question_ids, submitted, verdict, marks):
    paper = make_paper(questions=[("mcq", 5, "B")], assigned=[student])
    AttemptService.start_attempt(paper_id=paper.pk, student=student)

    attempt = _submit(paper, student, [{"question_id": question_ids(paper)[0], "answer": submitted}])

    ans = attempt.answers.get()
    assert ans.verdict == verdict
    assert ans.obtained_marks == marks
    assert ans.auto_graded is True
    assert ans.graded_at is not None


def test_unanswered_mcq_stays_ungraded(make_paper, student):
    paper = make_paper(questions=[("mcq", 5, "B")], assigned=[student])
    AttemptService.start_attempt(paper_id=paper.pk, student=student)

    attempt = _submit(paper, student, [])

    ans = attempt.answers.get()
    assert ans.is_correct is None
    assert ans.obtained_marks == 0
    assert attempt.status == Attempt.Status.SUBMITTED


def test_all_mcq_correct_is_auto_graded(make_paper, student, question_ids):
    paper = make_paper(questions=[("mcq", 5, "B"), ("mcq", 5, "C")], assigned=[student], passing_marks=5)
    first, second = question_ids(paper)
    AttemptService.start_attempt(paper_id=paper.pk, student=student)

    attempt = _submit(paper, student, [
        {"question_id": first, "answer": "B"},
        {"question_id": second, "answer": "C"},
    ])

    assert attempt.obtained_marks == Decimal("10")
    assert attempt.percentage == Decimal("100.00")
    assert attempt.is_passed is True
    assert attempt.status == Attempt.Status.AUTO_GRADED
    assert attempt.submit_time is not None


def test_free_text_answer_leaves_attempt_submitted(make_paper, student, question_ids):
    paper = make_paper(questions=[("mcq", 5, "B"), ("short_answer", 5, None)], assigned=[student])
    mcq_id, short_id = question_ids(paper)
    AttemptService.start_attempt(paper_id=paper.pk, student=student)

    attempt = _submit(paper, student, [{"question_id": mcq_id, "answer": "B"}])

    assert attempt.obtained_marks == Decimal("5")
    assert attempt.percentage == Decimal("50.00")
    assert attempt.status == Attempt.Status.SUBMITTED
    short = attempt.answers.get(question_id=short_id)
    assert short.answer == ""
    assert short.is_correct is None


def test_submitted_text_is_stored_and_unknown_questions_ignored(make_paper, student, question_ids):
    paper = make_paper(questions=[("long_answer", 10, None)], assigned=[student])
    (essay_id,) = question_ids(paper)
    AttemptService.start_attempt(paper_id=paper.pk, student=student)

    attempt = _submit(paper, student, [
        {"question_id": essay_id, "answer": "My essay"},
        {"question_id": essay_id, "answer": "ignored duplicate"},
        {"question_id": 424242, "answer": "stray"},
    ])

    ans = attempt.answers.get()
    assert ans.answer == "My essay"
    assert ans.auto_graded is False
    assert attempt.answers.count() == 1


def test_is_passed_uses_paper_passing_marks(make_paper, student, question_ids):
    paper = make_paper(questions=[("mcq", 5, "B"), ("mcq", 5, "C")], assigned=[student], passing_marks=8)
    first, second = question_ids(paper)
    AttemptService.start_attempt(paper_id=paper.pk, student=student)

    attempt = _submit(paper, student, [
        {"question_id": first, "answer": "B"},
        {"question_id": second, "answer": "A"},
    ])

    assert attempt.percentage == Decimal("50.00")
    assert attempt.is_passed is False


def test_zero_total_marks_does_not_divide_by_zero(make_paper, student, question_ids):
    paper = make_paper(questions=[("mcq", 5, "B")], assigned=[student], total_marks=0)
    AttemptService.start_attempt(paper_id=paper.pk, student=student)

    attempt = _submit(paper, student, [{"question_id": question_ids(paper)[0], "answer": "B"}])

    assert attempt.percentage == Decimal("0.00")


def test_time_spent_in_minutes(make_paper, student):
    paper = make_paper(assigned=[student])
    attempt, _ = AttemptService.start_attempt(paper_id=paper.pk, student=student)
    Attempt.objects.filter(pk=attempt.pk).update(start_time=timezone.now() - timedelta(minutes=17))

    attempt = _submit(paper, student, [])

    assert attempt.time_spent == 17


def test_submit_without_in_progress_attempt_is_not_found(make_paper, student):
    paper = make_paper(assigned=[student])

    with pytest.raises(NotFound):
        _submit(paper, student, [])


def test_second_submit_is_rejected(make_paper, student, question_ids):
    paper = make_paper(questions=[("mcq", 5, "B")], assigned=[student], max_attempts=2)
    AttemptService.start_attempt(paper_id=paper.pk, student=student)
    _submit(paper, student, [{"question_id": question_ids(paper)[0], "answer": "B"}])

    with pytest.raises(NotFound):
        _submit(paper, student, [{"question_id": question_ids(paper)[0], "answer": "A"}])

    ans = Answer.objects.get()
    assert ans.answer == "B"
