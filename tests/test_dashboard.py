import unittest
from datetime import date

from monday_dash.client import MondayClient
from monday_dash.dashboard import load_project_dates, load_timeline
from monday_dash.dates import STATUS_NO_DATES
from tests.stub_session import FakeSession

TODAY = date(2025, 6, 15)


class TestDashboardLoaders(unittest.TestCase):
    def test_missing_detail_reads_as_no_dates(self) -> None:
        session = FakeSession.returning({"boards": []})
        client = MondayClient(api_token="t", session=session)

        with self.assertLogs("monday_dash.dashboard", level="WARNING"):
            ((board, pd),) = load_project_dates(client, [{"id": "5", "name": "Gone"}], TODAY)

        self.assertEqual(board["id"], "5")
        self.assertEqual(pd.status, STATUS_NO_DATES)

    def test_timeline_reads_each_main_board_once(self) -> None:
        session = FakeSession.routed({
            "boards(ids:": {"boards": [{"id": "1", "name": "A", "items_page": {"items": []}}]},
            "boards(": {"boards": [
                {"id": "1", "name": "A", "items_page": {"items": []}},
                {"id": "2", "name": "Subitems of A", "items_page": {"items": []}},
            ]},
        })
        chart = load_timeline(MondayClient(api_token="t", session=session), today=TODAY)

        self.assertEqual(len(chart["rows"]), 1)
        detail_reads = [q for q in session.queries if "boards(ids:" in q]
        self.assertEqual(len(detail_reads), 1)
        self.assertEqual(session.calls[1]["json"]["variables"], {"boardId": "1"})


if __name__ == "__main__":
    unittest.main(verbosity=2)
