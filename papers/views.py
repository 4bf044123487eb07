from rest_framework import viewsets, permissions, filters

from cores.exceptions import NotFound, Forbidden
from .models import Paper
from .serializers import PaperListSerializer, PaperDetailSerializer, StudentPaperDetailSerializer


class PaperViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Paper catalog.
    Students see the active papers assigned to them, teachers the papers they created.
    Authoring happens in the Django admin.
    """
    permission_classes = [permissions.IsAuthenticated]

    # Enable search on title and subject
    filter_backends = [filters.SearchFilter]
    search_fields = ['title', 'subject']

    def get_queryset(self):
        user = self.request.user
        queryset = Paper.objects.all().order_by('-created_at')
        if user.is_student:
            return queryset.filter(assigned_to=user, is_active=True)
        if user.is_staff or user.role == user.Role.ADMIN:
            return queryset
        return queryset.filter(created_by=user)

    def get_serializer_class(self):
        if self.action == 'retrieve':
            if self.request.user.is_student:
                return StudentPaperDetailSerializer
            return PaperDetailSerializer
        return PaperListSerializer

    def get_object(self):
        paper = self.get_queryset().prefetch_related('questions').filter(pk=self.kwargs['pk']).first()
        if paper is not None:
            return paper
        user = self.request.user
        # Outside the caller's scope: unassigned students get a distinct error
        if user.is_student and Paper.objects.filter(pk=self.kwargs['pk'], is_active=True).exclude(assigned_to=user).exists():
            raise Forbidden("You are not assigned to this paper")
        raise NotFound("Paper not found")
