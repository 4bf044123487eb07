from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from papers.models import Paper, Question

User = get_user_model()


def _user(email, role, **extra):
    return User.objects.create_user(
        username=email,
        email=email,
        password="pass-1234",
        first_name=email.split("@")[0].title(),
        last_name="Tester",
        role=role,
        **extra,
    )


@pytest.fixture
def teacher(db):
    return _user("teacher@example.com", User.Role.TEACHER)


@pytest.fixture
def student(db):
    return _user("student@example.com", User.Role.STUDENT)


@pytest.fixture
def other_student(db):
    return _user("other@example.com", User.Role.STUDENT)


@pytest.fixture
def make_paper(teacher):
    """
    Builds a paper with questions given as (question_type, marks, correct_answer).
    total_marks defaults to the sum of question marks.
    """
    def _make(
        questions=(("mcq", 5, "B"), ("mcq", 5, "C")),
        assigned=(),
        max_attempts=1,
        passing_marks=None,
        total_marks=None,
        opens_in=timedelta(hours=-1),
        closes_in=timedelta(hours=1),
    ):
        now = timezone.now()
        paper = Paper.objects.create(
            title="Algebra I",
            subject="Maths",
            created_by=teacher,
            start_time=now + opens_in,
            end_time=now + closes_in,
            max_attempts=max_attempts,
            passing_marks=passing_marks,
            total_marks=total_marks if total_marks is not None else sum(q[1] for q in questions),
        )
        for order, (question_type, marks, correct) in enumerate(questions):
            Question.objects.create(
                paper=paper,
                question_type=question_type,
                text=f"Question {order + 1}",
                options=["A", "B", "C", "D"] if question_type == "mcq" else [],
                correct_answer=correct or "",
                marks=marks,
                order=order,
            )
        paper.assigned_to.add(*assigned)
        return paper

    return _make


@pytest.fixture
def question_ids():
    """Question ids of a paper in display order."""
    def _ids(paper):
        return list(paper.questions.order_by("order").values_list("id", flat=True))
    return _ids


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def student_client(student):
    client = APIClient()
    client.force_authenticate(user=student)
    return client


@pytest.fixture
def teacher_client(teacher):
    client = APIClient()
    client.force_authenticate(user=teacher)
    return client
