"""Tests for rental segments and row packing on the month grid."""

import random
from datetime import date, timedelta
from types import SimpleNamespace

from django.test import SimpleTestCase

from calendar_engine.rentals import (
    layout_week_rentals,
    month_weeks,
    pack_rows,
    row_count,
    split_rental,
    week_of,
)
from calendar_engine.types import Segment, WeekWindow


def _rental(name, start, end):
    return SimpleNamespace(pk=name, start_date=start, end_date=end)


class WeekWindowTests(SimpleTestCase):
    """Test Monday-first week construction."""

    def test_week_of(self):
        week = week_of(date(2024, 6, 6))
        self.assertEqual(week.first, date(2024, 6, 3))
        self.assertEqual(week.last, date(2024, 6, 9))
        self.assertEqual(week.column_of(date(2024, 6, 6)), 4)
        self.assertEqual(len(week.days), 7)

    def test_month_weeks_with_partial_weeks(self):
        weeks = month_weeks(2024, 6)

        self.assertEqual(len(weeks), 5)
        self.assertEqual(weeks[0].first, date(2024, 5, 27))
        self.assertEqual(weeks[-1].last, date(2024, 6, 30))

    def test_month_weeks_exact_fit(self):
        weeks = month_weeks(2021, 2)

        self.assertEqual(len(weeks), 4)
        self.assertEqual(weeks[0].first, date(2021, 2, 1))
        self.assertEqual(weeks[-1].last, date(2021, 2, 28))


class SplitRentalTests(SimpleTestCase):
    """Test slicing a rental against one week."""

    def setUp(self):
        self.week = WeekWindow(first=date(2024, 6, 3))

    def test_no_overlap(self):
        self.assertIsNone(split_rental(_rental('a', date(2024, 5, 20), date(2024, 6, 2)), self.week))
        self.assertIsNone(split_rental(_rental('b', date(2024, 6, 10), date(2024, 6, 12)), self.week))

    def test_continues_from_previous_week(self):
        segment = split_rental(_rental('r1', date(2024, 6, 1), date(2024, 6, 5)), self.week)

        self.assertEqual(segment.start_column, 1)
        self.assertEqual(segment.end_column, 3)
        self.assertFalse(segment.is_start)
        self.assertTrue(segment.is_end)

    def test_single_day(self):
        segment = split_rental(_rental('r2', date(2024, 6, 4), date(2024, 6, 4)), self.week)

        self.assertEqual(segment.start_column, 2)
        self.assertEqual(segment.span, 1)
        self.assertTrue(segment.is_start)
        self.assertTrue(segment.is_end)

    def test_continues_into_next_week(self):
        segment = split_rental(_rental('r3', date(2024, 6, 4), date(2024, 6, 10)), self.week)

        self.assertEqual(segment.start_column, 2)
        self.assertEqual(segment.end_column, 7)
        self.assertTrue(segment.is_start)
        self.assertFalse(segment.is_end)

    def test_spans_whole_week(self):
        segment = split_rental(_rental('long', date(2024, 5, 1), date(2024, 7, 1)), self.week)

        self.assertEqual((segment.start_column, segment.span), (1, 7))
        self.assertFalse(segment.is_start)
        self.assertFalse(segment.is_end)

    def test_inverted_rental_is_excluded(self):
        """A reversed date range inside the week yields no segment."""
        self.assertIsNone(split_rental(_rental('bad', date(2024, 6, 6), date(2024, 6, 4)), self.week))

    def test_three_week_rental_caps_only_on_true_ends(self):
        rental = _rental('trip', date(2024, 6, 5), date(2024, 6, 19))
        segments = [split_rental(rental, week) for week in month_weeks(2024, 6)]
        segments = [segment for segment in segments if segment is not None]

        self.assertEqual(len(segments), 3)
        self.assertEqual([s.is_start for s in segments], [True, False, False])
        self.assertEqual([s.is_end for s in segments], [False, False, True])

    def test_span_matches_clipped_range(self):
        """Span equals the number of days shared by rental and week."""
        first = date(2024, 5, 25)
        for start_offset in range(0, 20):
            for length in range(0, 12):
                start = first + timedelta(days=start_offset)
                end = start + timedelta(days=length)
                segment = split_rental(_rental('x', start, end), self.week)
                touches = not (end < self.week.first or start > self.week.last)
                with self.subTest(start=start, end=end):
                    if not touches:
                        self.assertIsNone(segment)
                        continue
                    expected = (min(end, self.week.last) - max(start, self.week.first)).days + 1
                    self.assertEqual(segment.span, expected)
                    self.assertGreaterEqual(segment.start_column, 1)
                    self.assertLessEqual(segment.end_column, 7)


class PackRowsTests(SimpleTestCase):
    """Test greedy row packing."""

    def _segment(self, start_column, span):
        return Segment(rental=None, start_column=start_column, span=span, is_start=True, is_end=True)

    def test_empty(self):
        self.assertEqual(pack_rows([]), [])
        self.assertEqual(row_count([]), 0)

    def test_disjoint_segments_share_a_row(self):
        segments = pack_rows([self._segment(1, 3), self._segment(4, 2)])
        self.assertEqual([s.row for s in segments], [0, 0])
        self.assertEqual(row_count(segments), 1)

    def test_wider_segment_placed_first_on_tie(self):
        narrow = self._segment(2, 1)
        wide = self._segment(2, 5)
        ordered = pack_rows([narrow, wide])

        self.assertIs(ordered[0], wide)
        self.assertEqual(wide.row, 0)
        self.assertEqual(narrow.row, 1)

    def test_reuses_lower_row_when_free(self):
        a = self._segment(1, 2)
        b = self._segment(2, 3)
        c = self._segment(3, 2)
        pack_rows([a, b, c])

        self.assertEqual((a.row, b.row, c.row), (0, 1, 0))

    def test_rows_never_share_columns(self):
        rng = random.Random(7)
        for _ in range(50):
            segments = []
            for _ in range(rng.randint(1, 12)):
                start = rng.randint(1, 7)
                segments.append(self._segment(start, rng.randint(1, 8 - start)))
            packed = pack_rows(segments)

            for i, left in enumerate(packed):
                for right in packed[i + 1:]:
                    if left.row == right.row:
                        self.assertFalse(set(left.columns) & set(right.columns))
            self.assertEqual(row_count(packed), max(s.row for s in packed) + 1)


class WeekLayoutScenarioTests(SimpleTestCase):
    """End-to-end split and pack of one week."""

    def setUp(self):
        self.week = WeekWindow(first=date(2024, 6, 3))

    def test_rentals_of_week_of_june_third(self):
        r1 = _rental('R1', date(2024, 6, 1), date(2024, 6, 5))
        r2 = _rental('R2', date(2024, 6, 4), date(2024, 6, 4))
        r3 = _rental('R3', date(2024, 6, 4), date(2024, 6, 10))

        segments = {s.rental.pk: s for s in layout_week_rentals([r1, r2, r3], self.week)}

        self.assertEqual((segments['R1'].start_column, segments['R1'].end_column), (1, 3))
        self.assertEqual((segments['R2'].start_column, segments['R2'].end_column), (2, 2))
        self.assertEqual((segments['R3'].start_column, segments['R3'].end_column), (2, 7))
        self.assertEqual(segments['R1'].row, 0)
        self.assertEqual(segments['R3'].row, 1)
        self.assertEqual(segments['R2'].row, 2)
        self.assertEqual(row_count(segments.values()), 3)

    def test_rentals_starting_thursday(self):
        r1 = _rental('R1', date(2024, 6, 1), date(2024, 6, 5))
        r2 = _rental('R2', date(2024, 6, 6), date(2024, 6, 6))
        r3 = _rental('R3', date(2024, 6, 6), date(2024, 6, 10))

        packed = layout_week_rentals([r1, r2, r3], self.week)
        segments = {s.rental.pk: s for s in packed}

        self.assertEqual((segments['R1'].start_column, segments['R1'].end_column), (1, 3))
        self.assertFalse(segments['R1'].is_start)
        self.assertTrue(segments['R1'].is_end)
        self.assertEqual((segments['R2'].start_column, segments['R2'].end_column), (4, 4))
        self.assertTrue(segments['R2'].is_start and segments['R2'].is_end)
        self.assertEqual((segments['R3'].start_column, segments['R3'].end_column), (4, 7))
        self.assertTrue(segments['R3'].is_start)
        self.assertFalse(segments['R3'].is_end)

        self.assertEqual(segments['R1'].row, 0)
        self.assertEqual(segments['R3'].row, 0)
        self.assertEqual(segments['R2'].row, 1)
        self.assertEqual(row_count(packed), 2)

    def test_rentals_outside_week_are_skipped(self):
        packed = layout_week_rentals([_rental('gone', date(2024, 5, 1), date(2024, 5, 2))], self.week)
        self.assertEqual(packed, [])
