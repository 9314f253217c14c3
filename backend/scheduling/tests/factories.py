"""Builders shared by the scheduling tests."""

from datetime import date, datetime, time, timezone
from itertools import count

from ..domain import (
    Category,
    CategoryLimits,
    DayCaps,
    Importance,
    Task,
    Urgency,
)


# Tuesday
TODAY = date(2025, 11, 25)

_ids = count(1)


def make_task(**overrides) -> Task:
    """A not-urgent, not-important 1h Personal task created at noon today."""
    created = overrides.pop('created_on', TODAY)
    data = {
        'id': f"task-{next(_ids)}",
        'title': 'Test Task',
        'category': Category.PERSONAL,
        'estimated_hours': 1,
        'created_at': datetime.combine(created, time(12, 0), tzinfo=timezone.utc),
        'importance': Importance.NOT_IMPORTANT,
        'urgency': Urgency.NOT_URGENT,
    }
    data.update(overrides)
    return Task(**data)


def make_limits(work=(6, 2), home=(3, 4), health=(3, 2), personal=(3, 4)) -> CategoryLimits:
    return CategoryLimits({
        Category.WORK: DayCaps(*work),
        Category.HOME: DayCaps(*home),
        Category.HEALTH: DayCaps(*health),
        Category.PERSONAL: DayCaps(*personal),
    })


DAILY_MAX_HOURS = DayCaps(weekday=8, weekend=6)
DAILY_MAX_TASKS = DayCaps(weekday=4, weekend=4)
