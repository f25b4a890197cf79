from datetime import date, datetime, timedelta

import pytest

from chore_calendar.utils.calendar_utils import (
    AssignmentIndex,
    day_index,
    first_of_month,
    last_of_month,
    month_matrix,
    parse_iso_date,
    shift_month,
    to_iso_date,
    week_dates,
    week_end,
    week_start,
)


class TestWeeks:
    def test_every_day_of_a_week_maps_to_its_sunday(self):
        sunday = date(2026, 2, 15)

        for offset in range(7):
            assert week_start(sunday + timedelta(days=offset)) == sunday

    def test_saturday_and_next_sunday_differ(self):
        assert week_start(date(2026, 2, 21)) == date(2026, 2, 15)
        assert week_start(date(2026, 2, 22)) == date(2026, 2, 22)

    def test_datetimes_are_truncated(self):
        assert week_start(datetime(2026, 2, 18, 23, 59)) == date(2026, 2, 15)

    def test_week_crossing_a_year(self):
        assert week_start(date(2026, 1, 1)) == date(2025, 12, 28)

    def test_week_dates(self):
        dates = week_dates(date(2026, 2, 15))

        assert len(dates) == 7
        assert dates[0] == date(2026, 2, 15)
        assert dates[-1] == week_end(date(2026, 2, 15)) == date(2026, 2, 21)
        assert [day_index(d) for d in dates] == list(range(7))

    def test_day_index_starts_on_sunday(self):
        assert day_index(date(2026, 2, 15)) == 0
        assert day_index(date(2026, 2, 16)) == 1
        assert day_index(date(2026, 2, 21)) == 6


class TestIsoDates:
    def test_round_trip(self):
        assert parse_iso_date(to_iso_date(date(2026, 2, 16))) == date(2026, 2, 16)

    @pytest.mark.parametrize("value", ["2026-2-16", "2026-02-30", "16/02/2026", "2026-W08-1", "20260216", "", None])
    def test_rejects_anything_else(self, value):
        with pytest.raises(ValueError):
            parse_iso_date(value)


class TestMonths:
    def test_shift_month_across_years(self):
        assert shift_month(date(2026, 12, 15), 1) == date(2027, 1, 1)
        assert shift_month(date(2026, 1, 31), -1) == date(2025, 12, 1)
        assert shift_month(date(2026, 3, 10), 0) == date(2026, 3, 1)

    def test_first_and_last(self):
        assert first_of_month(date(2026, 2, 18)) == date(2026, 2, 1)
        assert last_of_month(date(2026, 2, 18)) == date(2026, 2, 28)
        assert last_of_month(date(2028, 2, 1)) == date(2028, 2, 29)

    @pytest.mark.parametrize("month, rows", [
        (date(2026, 2, 1), 4),   # starts Sunday, ends Saturday
        (date(2026, 3, 1), 5),
        (date(2026, 8, 1), 6),   # starts Saturday, 31 days
    ])
    def test_row_counts(self, month, rows):
        assert len(month_matrix(month)) == rows

    @pytest.mark.parametrize("year", [2025, 2026, 2027, 2028])
    def test_matrix_is_complete_weeks_covering_the_month(self, year):
        for month in range(1, 13):
            first = date(year, month, 1)
            matrix = month_matrix(first)
            flat = [d for row in matrix for d in row]

            assert all(len(row) == 7 for row in matrix)
            assert len(flat) % 7 == 0
            assert flat[0] == week_start(first)
            assert all(day_index(row[0]) == 0 for row in matrix)
            assert first in flat and last_of_month(first) in flat
            assert all(b - a == timedelta(days=1) for a, b in zip(flat, flat[1:]))
            # No row entirely after the month
            assert matrix[-1][0] <= last_of_month(first)

    def test_any_day_of_the_month_gives_the_same_matrix(self):
        assert month_matrix(date(2026, 2, 20)) == month_matrix(date(2026, 2, 1))


class TestAssignmentIndex:
    def make_index(self):
        return AssignmentIndex([
            {"id": "a1", "person_id": "jo", "chore_id": "dishes", "week_start_iso": "2026-02-15", "day_index": 1},
            {"id": "a2", "person_id": "jo", "chore_id": "trash", "week_start_iso": "2026-02-15", "day_index": 1},
            {"id": "a3", "person_id": "sam", "chore_id": "dishes", "week_start_iso": "2026-02-22", "day_index": 0},
        ])

    def test_lookup_by_key(self):
        index = self.make_index()

        assert len(index) == 3
        assert [a["id"] for a in index.lookup("jo", "2026-02-15", 1)] == ["a1", "a2"]
        assert index.lookup("jo", "2026-02-15", 2) == ()

    def test_dates_are_mapped_to_week_and_day(self):
        index = self.make_index()

        assert index.has_chore("jo", date(2026, 2, 16))
        assert not index.has_chore("jo", date(2026, 2, 17))
        assert index.has_chore("sam", date(2026, 2, 22))
        assert index.chore_ids_on("jo", date(2026, 2, 16)) == ("dishes", "trash")
        assert len(index.chores_for("sam", date(2026, 2, 22))) == 1

    def test_find(self):
        index = self.make_index()

        assert index.find("jo", "2026-02-15", 1, "trash")["id"] == "a2"
        assert index.find("jo", "2026-02-15", 1, "laundry") is None

    def test_accepts_objects(self):
        class Row:
            person_id = "jo"
            chore_id = "dishes"
            week_start_iso = "2026-02-15"
            day_index = 3

        assert AssignmentIndex([Row()]).has_chore("jo", date(2026, 2, 18))
