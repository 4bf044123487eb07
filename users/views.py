from django.contrib.auth import get_user_model
from rest_framework import filters, generics, permissions
from rest_framework_simplejwt.views import TokenObtainPairView

from .permissions import IsTeacher
from .serializers import RegisterSerializer, RoleTokenObtainPairSerializer, UserSerializer, UserSummarySerializer

User = get_user_model()


class RegisterView(generics.CreateAPIView):
    serializer_class = RegisterSerializer
    permission_classes = [permissions.AllowAny]


class LoginView(TokenObtainPairView):
    serializer_class = RoleTokenObtainPairSerializer


class UserProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = UserSerializer

    def get_object(self):
        return self.request.user


class StudentRosterView(generics.ListAPIView):
    """Students a teacher can assign papers to; ?search= matches name or email."""
    serializer_class = UserSummarySerializer
    permission_classes = [IsTeacher]
    filter_backends = [filters.SearchFilter]
    search_fields = ['email', 'first_name', 'last_name']

    def get_queryset(self):
        return User.objects.filter(role=User.Role.STUDENT, is_active=True).order_by('last_name', 'first_name')
