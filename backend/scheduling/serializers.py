"""
Serializers for the scheduling API.

These validate incoming JSON at the boundary (hour caps 0-24, task caps
1-20, enum values, ISO dates) and convert it into engine domain objects.
The engine itself assumes its inputs are already well formed.
"""

from rest_framework import serializers

from .conf import default_day_caps, get_setting
from .domain import (
    Category,
    CategoryLimits,
    DayCaps,
    Importance,
    Task,
    Urgency,
)


class HourCapsSerializer(serializers.Serializer):
    """Weekday/weekend hour caps, each between 0 and 24."""

    weekday = serializers.FloatField(min_value=0, max_value=24)
    weekend = serializers.FloatField(min_value=0, max_value=24)


class TaskCountCapsSerializer(serializers.Serializer):
    """Weekday/weekend task-count caps, each between 1 and 20."""

    weekday = serializers.IntegerField(min_value=1, max_value=20)
    weekend = serializers.IntegerField(min_value=1, max_value=20)


class CategoryLimitsSerializer(serializers.DictField):
    """Mapping of category name to hour caps."""

    child = HourCapsSerializer()

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        valid = {c.value for c in Category}
        unknown = sorted(set(value) - valid)
        if unknown:
            raise serializers.ValidationError(
                f"Unknown categories: {', '.join(unknown)}. Valid options: {sorted(valid)}"
            )
        return value


class TaskInputSerializer(serializers.Serializer):
    """
    Serializer for validating incoming task data.

    Tasks arrive already persisted by the caller; only the fields the
    scheduler reads are accepted.
    """

    id = serializers.CharField(max_length=64)
    title = serializers.CharField(max_length=255)
    category = serializers.ChoiceField(choices=[c.value for c in Category])
    estimated_hours = serializers.FloatField(min_value=0.1, max_value=24)
    importance = serializers.ChoiceField(
        choices=[i.value for i in Importance],
        default=Importance.NOT_IMPORTANT.value
    )
    urgency = serializers.ChoiceField(
        choices=[u.value for u in Urgency],
        default=Urgency.NOT_URGENT.value
    )
    due_date = serializers.DateField(required=False, allow_null=True, default=None)
    start_date = serializers.DateField(required=False, allow_null=True, default=None)
    pinned_date = serializers.DateField(required=False, allow_null=True, default=None)
    completed = serializers.BooleanField(default=False)
    completed_at = serializers.DateTimeField(required=False, allow_null=True, default=None)
    created_at = serializers.DateTimeField()
    is_recurring = serializers.BooleanField(default=False)
    recurring_series_id = serializers.CharField(
        max_length=64,
        required=False,
        allow_null=True,
        default=None
    )

    def validate_title(self, value):
        """Ensure title is not empty or just whitespace."""
        if not value or not value.strip():
            raise serializers.ValidationError("Title cannot be empty")
        return value.strip()


def task_from_data(data: dict) -> Task:
    """Build a domain Task from validated serializer data."""
    return Task(
        id=data['id'],
        title=data['title'],
        category=Category(data['category']),
        estimated_hours=data['estimated_hours'],
        importance=Importance(data['importance']),
        urgency=Urgency(data['urgency']),
        due_date=data.get('due_date'),
        start_date=data.get('start_date'),
        pinned_date=data.get('pinned_date'),
        completed=data.get('completed', False),
        completed_at=data.get('completed_at'),
        created_at=data['created_at'],
        is_recurring=data.get('is_recurring', False),
        recurring_series_id=data.get('recurring_series_id'),
    )


class TaskListSerializer(serializers.Serializer):
    """Common base: a list of tasks plus an optional "today" override."""

    tasks = serializers.ListField(child=TaskInputSerializer(), allow_empty=True)
    today = serializers.DateField(required=False)

    def validate_tasks(self, value):
        seen_ids = set()
        for task in value:
            if task['id'] in seen_ids:
                raise serializers.ValidationError(f"Duplicate task ID: {task['id']}")
            seen_ids.add(task['id'])
        return value

    def get_tasks(self):
        return [task_from_data(t) for t in self.validated_data['tasks']]


class ScoreRequestSerializer(TaskListSerializer):
    tasks = serializers.ListField(
        child=TaskInputSerializer(),
        min_length=1,
        error_messages={
            'min_length': 'At least one task is required for scoring'
        }
    )


class FocusRequestSerializer(TaskListSerializer):
    daily_max_tasks = TaskCountCapsSerializer(required=False)

    def get_daily_max_tasks(self) -> DayCaps:
        caps = self.validated_data.get('daily_max_tasks')
        if caps is None:
            return default_day_caps('DEFAULT_DAILY_MAX_TASKS')
        return DayCaps(**caps)


class ScheduleRequestSerializer(FocusRequestSerializer):
    """
    Serializer for scheduling requests.

    Limits the caller does not supply fall back to the configured defaults;
    in particular a profile without ``daily_max_tasks`` gets 4 per day.
    """

    category_limits = CategoryLimitsSerializer(required=False)
    daily_max_hours = HourCapsSerializer(required=False)
    look_ahead_days = serializers.IntegerField(min_value=1, max_value=365, required=False)

    def get_category_limits(self) -> CategoryLimits:
        supplied = self.validated_data.get('category_limits') or {}
        fallback = default_day_caps('DEFAULT_CATEGORY_HOURS')
        return CategoryLimits({
            category: DayCaps(**supplied[category.value]) if category.value in supplied else fallback
            for category in Category
        })

    def get_daily_max_hours(self) -> DayCaps:
        caps = self.validated_data.get('daily_max_hours')
        if caps is None:
            return default_day_caps('DEFAULT_DAILY_MAX_HOURS')
        return DayCaps(**caps)

    def get_look_ahead_days(self) -> int:
        return self.validated_data.get('look_ahead_days') or get_setting('LOOK_AHEAD_DAYS')
