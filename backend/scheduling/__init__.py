"""
Task scheduling and prioritization engine.

The engine modules are plain Python and import nothing from Django; the
Django app around them (serializers, views, conf) is the HTTP boundary.
"""

from .context import CapacityLedger, SchedulingContext
from .engine import assign_start_dates, get_todays_focus_tasks, group_tasks_by_date
from .partition import deduplicate_recurring_tasks, partition_tasks
from .scoring import (
    add_priority_scores,
    calculate_priority_score,
    get_eisenhower_quadrant,
    get_priority_reason,
    get_score_breakdown,
)
from .strategy import schedule_tasks_greedy

__all__ = [
    'CapacityLedger',
    'SchedulingContext',
    'add_priority_scores',
    'assign_start_dates',
    'calculate_priority_score',
    'deduplicate_recurring_tasks',
    'get_eisenhower_quadrant',
    'get_priority_reason',
    'get_score_breakdown',
    'get_todays_focus_tasks',
    'group_tasks_by_date',
    'partition_tasks',
    'schedule_tasks_greedy',
]
