from django.urls import path
from .views import ResultDetailView, StudentResultListView, ClassResultListView, PublishResultView

urlpatterns = [
    path('results/<int:pk>/', ResultDetailView.as_view(), name='result-detail'),
    path('results/<int:pk>/publish/', PublishResultView.as_view(), name='result-publish'),
    path('results/student/<int:student_id>/', StudentResultListView.as_view(), name='student-results'),
    path('results/class/<int:paper_id>/', ClassResultListView.as_view(), name='class-results'),
]
