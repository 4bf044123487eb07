from rest_framework import generics, permissions, status, views
from rest_framework.response import Response

from cores.exceptions import NotFound
from results.serializers import ResultSerializer
from users.permissions import IsStudent, IsTeacher
from .models import Attempt
from .serializers import (
    AttemptSerializer,
    ActiveAttemptSerializer,
    AttemptSubmitSerializer,
    GradeAttemptSerializer,
)
from .services import AttemptService, GradingService


def _attempts():
    return Attempt.objects.select_related('paper', 'student').prefetch_related('answers')


# --- STUDENT VIEWS ---

class StartAttemptView(views.APIView):
    """
    Student starts (or resumes) an attempt.
    Returns the attempt WITH questions.
    """
    permission_classes = [IsStudent]

    def get(self, request, paper_id):
        attempt, created = AttemptService.start_attempt(paper_id=paper_id, student=request.user)
        serializer = ActiveAttemptSerializer(_attempts().get(pk=attempt.pk))
        return Response(
            {"success": True, "attempt": serializer.data},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class SubmitAttemptView(views.APIView):
    """
    Student submits answers.
    MCQs are scored immediately; free-text answers wait for a teacher.
    """
    permission_classes = [IsStudent]

    def post(self, request, paper_id):
        serializer = AttemptSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        attempt = AttemptService.submit_attempt(
            paper_id=paper_id,
            student=request.user,
            answers=serializer.validated_data['answers'],
        )
        return Response({"success": True, "attempt": AttemptSerializer(_attempts().get(pk=attempt.pk)).data})


class StudentAttemptsView(generics.ListAPIView):
    """List all attempts of the logged-in student."""
    permission_classes = [IsStudent]
    serializer_class = AttemptSerializer

    def get_queryset(self):
        return _attempts().filter(student=self.request.user).order_by('-start_time')


class AttemptDetailView(generics.RetrieveAPIView):
    """Students may only open their own attempts; teachers any."""
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = AttemptSerializer

    def get_object(self):
        queryset = _attempts()
        if self.request.user.is_student:
            queryset = queryset.filter(student=self.request.user)
        attempt = queryset.filter(pk=self.kwargs['pk']).first()
        if attempt is None:
            raise NotFound("Attempt not found")
        return attempt


# --- TEACHER VIEWS ---

class PendingGradingListView(generics.ListAPIView):
    """List all attempts that require manual grading."""
    permission_classes = [IsTeacher]
    serializer_class = AttemptSerializer

    def get_queryset(self):
        queryset = _attempts().filter(status=Attempt.Status.SUBMITTED).order_by('submit_time')
        paper_id = self.request.query_params.get('paper_id')
        if paper_id:
            queryset = queryset.filter(paper_id=paper_id)
        return queryset


class GradeAttemptView(views.APIView):
    """Teacher submits marks and feedback for an attempt."""
    permission_classes = [IsTeacher]

    def put(self, request, pk):
        serializer = GradeAttemptSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        outcome = GradingService.grade_attempt(
            attempt_id=pk,
            grader=request.user,
            graded_answers=serializer.validated_data['graded_answers'],
        )
        return Response({
            "success": True,
            "attempt": AttemptSerializer(_attempts().get(pk=outcome.attempt.pk)).data,
            "result": ResultSerializer(outcome.result).data,
        })
