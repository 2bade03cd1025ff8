# api/exceptions.py
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from algorithms.exceptions import MatchingError

logger = logging.getLogger(__name__)


def exception_handler(exc, context):
    """
    DRF exception handler that also understands the matching core's errors:
    validation problems become 400, donor lookup failures 503.
    """
    if isinstance(exc, MatchingError):
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"{exc.default_code}: {exc}")
        return Response(
            {'detail': str(exc), 'code': exc.default_code},
            status=exc.status_code,
        )

    return drf_exception_handler(exc, context)
