from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # --- Authentication ---
    path('api/auth/', include('users.urls')),

    # --- Paper catalog ---
    path('api/', include('papers.urls')),

    # --- Attempt flow & Grading ---
    path('api/', include('attempts.urls')),

    # --- Results ---
    path('api/', include('results.urls')),

    # --- Admin audit trail ---
    path('api/admin/', include('cores.urls')),
]
