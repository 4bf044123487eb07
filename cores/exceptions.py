# cores/exceptions.py
"""
Domain errors shared by the attempt, grading and result workflows.

All of them are DRF APIExceptions so views can simply let them propagate;
cores.exception_handler renders them as {"error": ..., "code": ...}.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class NotFound(APIException):
    """Paper, attempt or result does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class Forbidden(APIException):
    """Caller is not allowed to act on this resource (e.g. not assigned)."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action."
    default_code = "permission_denied"


class InvalidState(APIException):
    """Operation violates a lifecycle rule of the attempt state machine."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Operation not allowed in the current state."
    default_code = "invalid_state"
