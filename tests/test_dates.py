import json
import unittest
from datetime import date

from monday_dash.columns import DateValue, LogValue, TimelineValue
from monday_dash.dates import (
    STATUS_ACTIVE,
    STATUS_COMPLETED,
    STATUS_NO_DATES,
    STATUS_PLANNED,
    classify_status,
    estimated_duration_days,
    infer_board_dates,
    infer_dates,
    scan_bounds,
)

TODAY = date(2025, 6, 15)


def _date_cv(title, iso):
    return {"id": title.lower().replace(" ", "_"), "title": title, "type": "date",
            "value": json.dumps({"date": iso}), "text": iso}


class TestScanBounds(unittest.TestCase):
    def test_titles_route_to_start_or_end(self) -> None:
        values = [
            DateValue("s", "Start Date", date(2025, 1, 10)),
            DateValue("b", "Begin", date(2025, 1, 20)),
            DateValue("d", "Due Date", date(2025, 3, 1)),
            DateValue("f", "Finish", date(2025, 2, 1)),
        ]
        self.assertEqual(scan_bounds(values), (date(2025, 1, 10), date(2025, 3, 1)))

    def test_untitled_dates_feed_both_bounds(self) -> None:
        values = [
            DateValue("x", "Kickoff", date(2025, 4, 2)),
            LogValue("c", "Created", date(2025, 2, 5)),
        ]
        self.assertEqual(scan_bounds(values), (date(2025, 2, 5), date(2025, 4, 2)))

    def test_timeline_under_start_title_contributes_from(self) -> None:
        values = [TimelineValue("t", "Start window", date(2025, 1, 1), date(2025, 5, 1))]
        self.assertEqual(scan_bounds(values), (date(2025, 1, 1), None))


class TestInferDates(unittest.TestCase):
    def test_start_date_column_sets_start(self) -> None:
        result = infer_dates([DateValue("s", "Start Date", date(2025, 1, 10))], item_count=1, today=TODAY)
        self.assertEqual(result.start, date(2025, 1, 10))

    def test_start_only_is_widened_by_item_count(self) -> None:
        result = infer_dates([DateValue("s", "Start Date", date(2025, 6, 10))], item_count=5, today=TODAY)
        self.assertEqual(result.end, date(2025, 6, 20))
        self.assertTrue(result.estimated)
        self.assertEqual(result.status, STATUS_ACTIVE)

    def test_end_only_is_backfilled_with_minimum_duration(self) -> None:
        result = infer_dates([DateValue("d", "Deadline", date(2025, 9, 10))], item_count=1, today=TODAY)
        self.assertEqual(result.start, date(2025, 9, 3))
        self.assertTrue(result.estimated)
        self.assertEqual(result.status, STATUS_PLANNED)

    def test_no_dates(self) -> None:
        result = infer_dates([], item_count=3, today=TODAY)
        self.assertIsNone(result.start)
        self.assertIsNone(result.end)
        self.assertEqual(result.status, STATUS_NO_DATES)
        self.assertFalse(result.estimated)

    def test_both_bounds_known_is_not_estimated(self) -> None:
        values = [
            DateValue("s", "Start", date(2025, 1, 1)),
            DateValue("e", "End", date(2025, 2, 1)),
        ]
        result = infer_dates(values, item_count=2, today=TODAY)
        self.assertFalse(result.estimated)
        self.assertEqual(result.status, STATUS_COMPLETED)

    def test_duration_floor(self) -> None:
        self.assertEqual(estimated_duration_days(0), 7)
        self.assertEqual(estimated_duration_days(3), 7)
        self.assertEqual(estimated_duration_days(10), 20)


class TestClassifyStatus(unittest.TestCase):
    def test_statuses(self) -> None:
        self.assertEqual(classify_status(None, None, TODAY), STATUS_NO_DATES)
        self.assertEqual(classify_status(date(2025, 1, 1), date(2025, 6, 14), TODAY), STATUS_COMPLETED)
        self.assertEqual(classify_status(date(2025, 6, 1), date(2025, 6, 15), TODAY), STATUS_ACTIVE)
        self.assertEqual(classify_status(date(2025, 6, 15), date(2025, 7, 1), TODAY), STATUS_ACTIVE)
        self.assertEqual(classify_status(date(2025, 7, 1), date(2025, 8, 1), TODAY), STATUS_PLANNED)


class TestInferBoardDates(unittest.TestCase):
    def test_reads_items_across_groups(self) -> None:
        board = {
            "id": "1",
            "name": "Launch",
            "columns": [
                {"id": "start_date", "title": "Start Date", "type": "date"},
                {"id": "status", "title": "Status", "type": "status"},
                {"id": "due_date", "title": "Due Date", "type": "date"},
            ],
            "groups": [
                {"id": "g1", "items": [{"id": "i1", "column_values": [_date_cv("Start Date", "2025-01-10")]}]},
                {"id": "g2", "items": [{"id": "i2", "column_values": [
                    _date_cv("Due Date", "2025-03-01"),
                    {"id": "status", "title": "Status", "type": "status", "value": "{}", "text": ""},
                ]}]},
            ],
        }
        result = infer_board_dates(board, today=TODAY)

        self.assertEqual(result.start, date(2025, 1, 10))
        self.assertEqual(result.end, date(2025, 3, 1))
        self.assertEqual(result.item_count, 2)
        self.assertEqual(result.date_columns, ["Start Date (date)", "Due Date (date)"])
        self.assertEqual(result.to_dict()["startDate"], "2025-01-10")
        self.assertEqual(result.to_dict()["status"], STATUS_COMPLETED)

    def test_board_without_items(self) -> None:
        result = infer_board_dates({"id": "1", "name": "Empty", "items_page": {"items": []}}, today=TODAY)
        self.assertEqual(result.status, STATUS_NO_DATES)
        self.assertEqual(result.item_count, 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
