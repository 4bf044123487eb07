from rest_framework import generics
from rest_framework.permissions import IsAdminUser

from .models import AuditLog
from .serializers import AuditLogSerializer


class AuditLogListView(generics.ListAPIView):
    """Grading and publication trail.

    Filters: ?action=GRADE|PUBLISH, ?target_model=Attempt|Result, ?target_id=<pk>
    """
    serializer_class = AuditLogSerializer
    permission_classes = [IsAdminUser]

    def get_queryset(self):
        queryset = AuditLog.objects.select_related('actor')
        params = self.request.query_params
        if params.get('action'):
            queryset = queryset.filter(action=params['action'].upper())
        if params.get('target_model'):
            queryset = queryset.filter(target_model=params['target_model'])
        if params.get('target_id'):
            queryset = queryset.filter(target_object_id=params['target_id'])
        return queryset
