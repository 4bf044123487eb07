from django.urls import path
from .views import (
    StartAttemptView,
    SubmitAttemptView,
    StudentAttemptsView,
    AttemptDetailView,
    PendingGradingListView,
    GradeAttemptView,
)

urlpatterns = [
    # Student attempt flow
    path('papers/<int:paper_id>/attempt/', StartAttemptView.as_view(), name='start-attempt'),
    path('papers/<int:paper_id>/submit/', SubmitAttemptView.as_view(), name='submit-attempt'),
    path('attempts/', StudentAttemptsView.as_view(), name='student-attempts'),

    # --- Grading Module (Teacher) ---
    path('attempts/pending/', PendingGradingListView.as_view(), name='grading-pending'),
    path('attempts/<int:pk>/grade/', GradeAttemptView.as_view(), name='grade-attempt'),

    path('attempts/<int:pk>/', AttemptDetailView.as_view(), name='attempt-detail'),
]
