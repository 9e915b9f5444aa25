"""Tests for demo visitor generation."""

from datetime import datetime, timezone
from random import Random

from visitrack.repositories.visitor import VisitorRepository
from visitrack.services.demo_data import generate_visitors, seed_demo_visitors

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


class TestGenerateVisitors:
    """Tests for generate_visitors."""

    def test_seeded_output_is_reproducible(self):
        first = generate_visitors(300, 2023, now=NOW, rng=Random(42))
        second = generate_visitors(300, 2023, now=NOW, rng=Random(42))

        assert [(v.identifier, v.last_visit, v.visit_count) for v in first] == [
            (v.identifier, v.last_visit, v.visit_count) for v in second
        ]

    def test_every_visit_is_accounted_for(self):
        """Return visits fold into existing records without losing visits."""
        visitors = generate_visitors(1000, 2023, now=NOW, rng=Random(7))

        assert sum(v.visit_count for v in visitors) == 1000
        assert len({v.identifier for v in visitors}) == len(visitors)
        assert any(v.visit_count > 1 for v in visitors)

    def test_visits_fall_within_range_and_are_sorted(self):
        visitors = generate_visitors(500, 2024, now=NOW, rng=Random(3))
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)

        assert all(start <= v.last_visit <= NOW for v in visitors)
        assert all(v.created_at <= v.last_visit for v in visitors)
        assert [v.last_visit for v in visitors] == sorted(v.last_visit for v in visitors)

    def test_no_return_visits_for_small_sets(self):
        """Too few identifiers to repeat means one visit each."""
        visitors = generate_visitors(40, 2023, now=NOW, rng=Random(1))

        assert len(visitors) == 40
        assert all(v.visit_count == 1 for v in visitors)


class TestSeedDemoVisitors:
    """Tests for seeding a table."""

    def test_seed_and_clear(self, dynamodb_table):
        repo = VisitorRepository()
        repo.record_visit("192.0.2.250", "agent/1.0")

        visitors = seed_demo_visitors(repo, count=200, clear=True, rng=Random(11))

        totals = repo.get_totals()
        assert totals.unique_visitors == len(visitors)
        assert totals.total_visitors == 200
        assert repo.get_by_identifier("192.0.2.250") is None
