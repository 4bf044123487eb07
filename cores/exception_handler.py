import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An internal error occurred."


def api_exception_handler(exc, context):
    """
    Project-wide DRF exception handler.

    - APIException (domain errors, auth, 404) -> {"error": message, "code": code}
    - serializer validation errors keep DRF's field-error dict
    - anything else is logged with traceback and returned as a generic 500
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            "Unhandled error in %s", view.__class__.__name__ if view else "unknown view"
        )
        set_rollback()
        return Response({"error": GENERIC_ERROR}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    detail = response.data.get('detail') if isinstance(response.data, dict) else None
    if detail is not None and len(response.data) == 1:
        response.data = {
            "error": str(detail),
            "code": getattr(detail, 'code', None),
        }
    return response
