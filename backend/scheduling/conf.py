"""
Scheduling defaults, overridable from Django settings.

Any key left out of the project's SCHEDULING dict keeps its default:

    SCHEDULING = {
        'LOOK_AHEAD_DAYS': 90,
        'DEFAULT_DAILY_MAX_TASKS': {'weekday': 4, 'weekend': 4},
        'DEFAULT_DAILY_MAX_HOURS': {'weekday': 8, 'weekend': 6},
        'DEFAULT_CATEGORY_HOURS': {'weekday': 4, 'weekend': 4},
    }

Only the HTTP boundary reads these; the engine takes explicit arguments.
"""

from django.conf import settings

from .domain import DayCaps


DEFAULTS = {
    'LOOK_AHEAD_DAYS': 90,
    'DEFAULT_DAILY_MAX_TASKS': {'weekday': 4, 'weekend': 4},
    'DEFAULT_DAILY_MAX_HOURS': {'weekday': 8, 'weekend': 6},
    'DEFAULT_CATEGORY_HOURS': {'weekday': 4, 'weekend': 4},
}


def get_setting(name: str):
    overrides = getattr(settings, 'SCHEDULING', {}) or {}
    if name not in DEFAULTS:
        raise KeyError(f"Unknown scheduling setting: {name}")
    return overrides.get(name, DEFAULTS[name])


def default_day_caps(name: str) -> DayCaps:
    caps = get_setting(name)
    return DayCaps(weekday=caps['weekday'], weekend=caps['weekend'])
