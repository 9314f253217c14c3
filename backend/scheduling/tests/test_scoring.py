"""
Unit tests for priority scoring.

Every test pins "today" so results never depend on the wall clock.
"""

from datetime import timedelta

from django.test import TestCase

from ..domain import EisenhowerQuadrant, Importance, Urgency
from ..scoring import (
    PriorityScorer,
    add_priority_scores,
    calculate_priority_score,
    get_eisenhower_quadrant,
    get_priority_reason,
    get_score_breakdown,
)
from .factories import TODAY, make_task


def due_in(days):
    return TODAY + timedelta(days=days)


class QuadrantTests(TestCase):
    """Tests for Eisenhower quadrant classification and base scores."""

    def setUp(self):
        self.scorer = PriorityScorer(TODAY)

    def test_quadrant_mapping(self):
        """Each importance/urgency pair maps to its own quadrant."""
        cases = [
            (Importance.IMPORTANT, Urgency.URGENT, EisenhowerQuadrant.URGENT_IMPORTANT),
            (Importance.IMPORTANT, Urgency.NOT_URGENT, EisenhowerQuadrant.NOT_URGENT_IMPORTANT),
            (Importance.NOT_IMPORTANT, Urgency.URGENT, EisenhowerQuadrant.URGENT_NOT_IMPORTANT),
            (Importance.NOT_IMPORTANT, Urgency.NOT_URGENT, EisenhowerQuadrant.NOT_URGENT_NOT_IMPORTANT),
        ]
        for importance, urgency, expected in cases:
            task = make_task(importance=importance, urgency=urgency)
            self.assertEqual(get_eisenhower_quadrant(task), expected)

    def test_base_scores(self):
        """Base score is 100/80/60/40 by quadrant."""
        self.assertEqual(self.scorer.calculate_base_score(
            make_task(importance=Importance.IMPORTANT, urgency=Urgency.URGENT)), 100)
        self.assertEqual(self.scorer.calculate_base_score(
            make_task(importance=Importance.IMPORTANT)), 80)
        self.assertEqual(self.scorer.calculate_base_score(
            make_task(urgency=Urgency.URGENT)), 60)
        self.assertEqual(self.scorer.calculate_base_score(make_task()), 40)


class DeadlineScoreTests(TestCase):
    """Tests for the deadline component."""

    def setUp(self):
        self.scorer = PriorityScorer(TODAY)

    def test_no_due_date(self):
        self.assertEqual(self.scorer.calculate_deadline_score(make_task()), 0)

    def test_overdue_grows_per_day(self):
        """Overdue by D days scores 200 + 25 * D."""
        self.assertEqual(self.scorer.calculate_deadline_score(make_task(due_date=due_in(-1))), 225)
        self.assertEqual(self.scorer.calculate_deadline_score(make_task(due_date=due_in(-3))), 275)

    def test_due_today(self):
        self.assertEqual(self.scorer.calculate_deadline_score(make_task(due_date=TODAY)), 150)

    def test_due_soon_is_between_today_and_next_week(self):
        """A two-day deadline scores strictly between due-today and due-in-7-days."""
        two_days = self.scorer.calculate_deadline_score(make_task(due_date=due_in(2)))
        today = self.scorer.calculate_deadline_score(make_task(due_date=TODAY))
        week = self.scorer.calculate_deadline_score(make_task(due_date=due_in(7)))

        self.assertGreater(two_days, week)
        self.assertLess(two_days, today)

    def test_ordering_of_deadlines(self):
        """due today > due tomorrow > due in 3 days > due in 7 days > no deadline."""
        scores = [
            self.scorer.calculate_deadline_score(make_task(due_date=TODAY)),
            self.scorer.calculate_deadline_score(make_task(due_date=due_in(1))),
            self.scorer.calculate_deadline_score(make_task(due_date=due_in(3))),
            self.scorer.calculate_deadline_score(make_task(due_date=due_in(7))),
            self.scorer.calculate_deadline_score(make_task()),
        ]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertEqual(len(set(scores)), len(scores))

    def test_never_increases_with_distance(self):
        """Moving the deadline further out never raises the score."""
        previous = None
        for offset in range(-10, 31):
            score = self.scorer.calculate_deadline_score(make_task(due_date=due_in(offset)))
            if previous is not None:
                self.assertLessEqual(score, previous, f"offset {offset}")
            previous = score

    def test_completed_task_has_no_deadline_pressure(self):
        task = make_task(due_date=due_in(-5), completed=True)
        self.assertEqual(self.scorer.calculate_deadline_score(task), 0)


class DurationScoreTests(TestCase):
    """Tests for the duration component."""

    def setUp(self):
        self.scorer = PriorityScorer(TODAY)

    def test_large_task_due_tomorrow(self):
        """8 hours due tomorrow contributes 8 / 1 * 15 = 120."""
        task = make_task(estimated_hours=8, due_date=due_in(1))
        self.assertEqual(self.scorer.calculate_duration_score(task), 120)

    def test_spread_over_days_left(self):
        task = make_task(estimated_hours=8, due_date=due_in(4))
        self.assertAlmostEqual(self.scorer.calculate_duration_score(task), 30.0)

    def test_overdue_and_today_use_one_day(self):
        """The divisor never drops below one day."""
        self.assertEqual(self.scorer.calculate_duration_score(
            make_task(estimated_hours=2, due_date=TODAY)), 30)
        self.assertEqual(self.scorer.calculate_duration_score(
            make_task(estimated_hours=2, due_date=due_in(-4))), 30)

    def test_no_due_date(self):
        self.assertEqual(self.scorer.calculate_duration_score(make_task(estimated_hours=8)), 0)


class AgeScoreTests(TestCase):
    """Tests for the age component."""

    def setUp(self):
        self.scorer = PriorityScorer(TODAY)

    def test_created_today(self):
        self.assertEqual(self.scorer.calculate_age_score(make_task()), 0)

    def test_one_point_per_day(self):
        task = make_task(created_on=TODAY - timedelta(days=5))
        self.assertEqual(self.scorer.calculate_age_score(task), 5)

    def test_capped_at_ten(self):
        task = make_task(created_on=TODAY - timedelta(days=45))
        self.assertEqual(self.scorer.calculate_age_score(task), 10)

    def test_created_in_future_is_zero(self):
        task = make_task(created_on=TODAY + timedelta(days=2))
        self.assertEqual(self.scorer.calculate_age_score(task), 0)


class BreakdownTests(TestCase):
    """Tests for the combined score."""

    def test_total_matches_priority_score(self):
        """The breakdown adds up to exactly the priority score."""
        tasks = [
            make_task(),
            make_task(estimated_hours=3.5, due_date=due_in(2),
                      created_on=TODAY - timedelta(days=3)),
            make_task(importance=Importance.IMPORTANT, urgency=Urgency.URGENT,
                      estimated_hours=7, due_date=due_in(-2)),
            make_task(estimated_hours=0.5, due_date=due_in(6), completed=True),
        ]
        for task in tasks:
            breakdown = get_score_breakdown(task, TODAY)
            self.assertEqual(breakdown.total, calculate_priority_score(task, TODAY))

    def test_overdue_outranks_fresh_important(self):
        overdue = make_task(due_date=due_in(-1))
        important = make_task(importance=Importance.IMPORTANT, urgency=Urgency.URGENT)
        self.assertGreater(
            calculate_priority_score(overdue, TODAY),
            calculate_priority_score(important, TODAY)
        )

    def test_add_priority_scores_keeps_order(self):
        tasks = [make_task(), make_task(due_date=TODAY), make_task(due_date=due_in(1))]
        scored = add_priority_scores(tasks, TODAY)

        self.assertEqual([s.task.id for s in scored], [t.id for t in tasks])
        self.assertEqual(scored[1].priority_score, 205)
        self.assertEqual(scored[1].reason, "Due today")

    def test_analyze_tasks_sorts_descending(self):
        tasks = [make_task(), make_task(due_date=due_in(-2)), make_task(due_date=due_in(5))]
        scored = PriorityScorer(TODAY).analyze_tasks(tasks)

        scores = [s.priority_score for s in scored]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertEqual(scored[0].task.id, tasks[1].id)


class PriorityReasonTests(TestCase):
    """Tests for the human-readable priority reason."""

    def reason(self, **overrides):
        return get_priority_reason(make_task(**overrides), TODAY)

    def test_completed(self):
        self.assertEqual(self.reason(completed=True, due_date=due_in(-3)), "Completed")

    def test_overdue(self):
        self.assertEqual(self.reason(due_date=due_in(-1)), "Overdue by 1 day")
        self.assertEqual(self.reason(due_date=due_in(-3)), "Overdue by 3 days")

    def test_due_today(self):
        self.assertEqual(self.reason(due_date=TODAY), "Due today")

    def test_due_tomorrow(self):
        self.assertEqual(self.reason(due_date=due_in(1)), "Due tomorrow")
        self.assertEqual(self.reason(due_date=due_in(1), estimated_hours=8), "8h task, due tomorrow")

    def test_due_in_a_few_days(self):
        self.assertEqual(self.reason(due_date=due_in(2)), "Due in 2 days")
        self.assertEqual(self.reason(due_date=due_in(3), estimated_hours=5), "5h task, due in 3 days")
        self.assertEqual(self.reason(due_date=due_in(6), estimated_hours=5), "Due in 6 days")

    def test_quadrant_reasons(self):
        self.assertEqual(
            self.reason(importance=Importance.IMPORTANT, urgency=Urgency.URGENT),
            "Urgent + Important"
        )
        self.assertEqual(self.reason(importance=Importance.IMPORTANT), "High impact")
        self.assertEqual(self.reason(urgency=Urgency.URGENT), "Urgent")

    def test_aging(self):
        self.assertEqual(self.reason(created_on=TODAY - timedelta(days=1)), "Aging 1 day")
        self.assertEqual(self.reason(created_on=TODAY - timedelta(days=5)), "Aging 5 days")

    def test_far_deadline_falls_through(self):
        self.assertEqual(self.reason(due_date=due_in(20)), "Scheduled today")

    def test_default(self):
        self.assertEqual(self.reason(), "Scheduled today")
