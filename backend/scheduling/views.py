"""
API Views for the scheduling engine.

Thin HTTP boundary: validate the payload, resolve "today" and any missing
limits, call the engine, shape the response. Nothing is persisted here;
callers write back only the tasks listed in ``rescheduled_tasks``.
"""

import logging

from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, throttle_classes
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from .conf import get_setting
from .engine import assign_start_dates, get_todays_focus_tasks
from .errors import ErrorCode
from .scoring import PriorityScorer
from .serializers import (
    FocusRequestSerializer,
    ScheduleRequestSerializer,
    ScoreRequestSerializer,
)


logger = logging.getLogger(__name__)


# ============================================
# RATE LIMITING CLASSES
# ============================================

class ScheduleRateThrottle(AnonRateThrottle):
    """Rate limit for schedule endpoint - 30 requests per minute."""
    rate = '30/min'


class ReadRateThrottle(AnonRateThrottle):
    """Rate limit for score and focus endpoints - 60 requests per minute."""
    rate = '60/min'


def _invalid(serializer, message: str) -> Response:
    errors = serializer.errors
    code = ErrorCode.ERR_INVALID_INPUT
    if any(k in errors for k in ('category_limits', 'daily_max_hours', 'daily_max_tasks')):
        code = ErrorCode.ERR_INVALID_LIMITS
    elif 'tasks' in errors and serializer.initial_data.get('tasks') == []:
        code = ErrorCode.ERR_EMPTY_TASKS

    return Response(
        {
            'success': False,
            'error_code': code.value,
            'errors': errors,
            'message': message,
        },
        status=status.HTTP_400_BAD_REQUEST
    )


def _today(serializer):
    return serializer.validated_data.get('today') or timezone.localdate()


# ============================================
# API ENDPOINTS
# ============================================

@extend_schema(
    summary="Assign start dates to tasks",
    description="""
    Run the scheduling engine over a user's tasks.

    Completed, recurring and pinned-for-today tasks keep their dates; all
    other open tasks are placed greedily by priority within the daily,
    per-category and task-count limits.
    """,
    request=ScheduleRequestSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Scheduling']
)
@api_view(['POST'])
@throttle_classes([ScheduleRateThrottle])
def schedule_tasks(request: Request) -> Response:
    """
    Assign start dates and report which tasks moved.

    POST /api/tasks/schedule/

    Request Body:
    {
        "tasks": [...],
        "category_limits": {"Work": {"weekday": 6, "weekend": 2}, ...},
        "daily_max_hours": {"weekday": 8, "weekend": 6},
        "daily_max_tasks": {"weekday": 4, "weekend": 4},   // Optional
        "today": "2025-11-25",                             // Optional
        "look_ahead_days": 90                              // Optional
    }
    """
    serializer = ScheduleRequestSerializer(data=request.data)

    if not serializer.is_valid():
        return _invalid(serializer, 'Invalid input data. Please check your tasks and limits.')

    result = assign_start_dates(
        serializer.get_tasks(),
        serializer.get_category_limits(),
        serializer.get_daily_max_hours(),
        serializer.get_daily_max_tasks(),
        today=_today(serializer),
        look_ahead_days=serializer.get_look_ahead_days(),
    )

    logger.info(
        "Schedule request: %d task(s), %d rescheduled",
        len(result.tasks), len(result.rescheduled_tasks)
    )

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'rescheduled': len(result.rescheduled_tasks),
        **result.to_dict(),
    })


@extend_schema(
    summary="Today's focus tasks",
    description="Tasks whose start date is today, best first, capped at today's task limit.",
    request=FocusRequestSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Scheduling']
)
@api_view(['POST'])
@throttle_classes([ReadRateThrottle])
def focus_tasks(request: Request) -> Response:
    """
    POST /api/tasks/focus/
    """
    serializer = FocusRequestSerializer(data=request.data)

    if not serializer.is_valid():
        return _invalid(serializer, 'Invalid input data. Please check your tasks format.')

    today = _today(serializer)
    focus = get_todays_focus_tasks(serializer.get_tasks(), today, serializer.get_daily_max_tasks())

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'today': today.isoformat(),
        'count': len(focus),
        'tasks': [s.to_dict() for s in focus],
    })


@extend_schema(
    summary="Score and explain tasks",
    description="Return every task with its priority score, breakdown, quadrant and reason.",
    request=ScoreRequestSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Scoring']
)
@api_view(['POST'])
@throttle_classes([ReadRateThrottle])
def score_tasks(request: Request) -> Response:
    """
    POST /api/tasks/score/
    """
    serializer = ScoreRequestSerializer(data=request.data)

    if not serializer.is_valid():
        return _invalid(serializer, 'Invalid input data. Please check your tasks format.')

    today = _today(serializer)
    scored = PriorityScorer(today).analyze_tasks(serializer.get_tasks())

    quadrant_counts = {}
    for s in scored:
        quadrant_counts[s.quadrant.value] = quadrant_counts.get(s.quadrant.value, 0) + 1

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'today': today.isoformat(),
        'count': len(scored),
        'tasks': [s.to_dict() for s in scored],
        'quadrants': quadrant_counts,
    })


@extend_schema(
    summary="API information",
    description="Get API information and available endpoints.",
    responses={200: OpenApiTypes.OBJECT},
    tags=['Info']
)
@api_view(['GET'])
def api_info(request: Request) -> Response:
    """
    GET /api/
    """
    return Response({
        'name': 'Focus Planner Scheduling API',
        'version': '1.0.0',
        'documentation': '/api/docs/',
        'look_ahead_days': get_setting('LOOK_AHEAD_DAYS'),
        'endpoints': {
            'POST /api/tasks/schedule/': 'Assign start dates within capacity limits',
            'POST /api/tasks/focus/': "Get today's focus tasks",
            'POST /api/tasks/score/': 'Score and explain tasks',
            'GET /api/docs/': 'Interactive API documentation',
            'GET /api/schema/': 'OpenAPI schema',
            'GET /api/': 'This info endpoint'
        },
        'error_codes': {
            code.value: code.name for code in ErrorCode
        }
    })
