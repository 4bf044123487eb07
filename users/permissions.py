from rest_framework import permissions


class IsStudent(permissions.BasePermission):
    """
    Allows access to student accounts only.
    Teachers and admins cannot take papers.
    """
    message = "Only students can perform this action."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return getattr(request.user, 'role', '') == 'student'


class IsTeacher(permissions.BasePermission):
    """
    Allows access to Teachers, Admins and staff.
    Strictly blocks Students.
    """
    message = "Only teachers can perform this action."

    def has_permission(self, request, view):
        # 1. User must be logged in
        if not request.user or not request.user.is_authenticated:
            return False

        # 2. Check Role
        return (
            request.user.is_staff or
            getattr(request.user, 'role', '') in ['teacher', 'admin']
        )
