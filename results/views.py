# results/views.py
from rest_framework import generics, permissions, views
from rest_framework.response import Response

from users.permissions import IsTeacher
from .serializers import ResultSerializer, PublishResultSerializer
from .services import ResultService


class ResultDetailView(views.APIView):
    """A single result. Students only see their own."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):
        result = ResultService.get_result(result_id=pk, viewer=request.user)
        return Response(ResultSerializer(result).data)


class StudentResultListView(generics.ListAPIView):
    """All results of one student, newest first."""
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ResultSerializer

    def get_queryset(self):
        return ResultService.student_results(student_id=self.kwargs['student_id'], viewer=self.request.user)


class ClassResultListView(generics.ListAPIView):
    """All results of one paper, highest scorer first."""
    permission_classes = [IsTeacher]
    serializer_class = ResultSerializer

    def get_queryset(self):
        return ResultService.class_results(paper_id=self.kwargs['paper_id'])


class PublishResultView(views.APIView):
    """Teacher toggles result visibility."""
    permission_classes = [IsTeacher]

    def patch(self, request, pk):
        serializer = PublishResultSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = ResultService.publish(
            result_id=pk,
            is_published=serializer.validated_data['is_published'],
            actor=request.user,
        )
        return Response(ResultSerializer(result).data)
