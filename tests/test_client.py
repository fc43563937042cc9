import json
import unittest

from monday_dash import queries
from monday_dash.client import MondayAPIError, MondayClient, MondayGraphQLError, MondayHTTPError
from tests.stub_session import NOT_JSON, FakeResponse, FakeSession


def _client(session: FakeSession, token: str = "tok-123") -> MondayClient:
    return MondayClient(api_token=token, api_url="https://example.test/v2", api_version="2023-04", session=session)


class TestMondayClient(unittest.TestCase):
    def test_execute_posts_query_with_auth_and_version_headers(self) -> None:
        session = FakeSession.returning({"me": {"id": "1"}})
        data = _client(session).execute(queries.ME, {"x": 1})

        self.assertEqual(data, {"me": {"id": "1"}})
        self.assertEqual(len(session.calls), 1)
        call = session.calls[0]
        self.assertEqual(call["url"], "https://example.test/v2")
        self.assertEqual(call["headers"]["Authorization"], "tok-123")
        self.assertEqual(call["headers"]["API-Version"], "2023-04")
        self.assertEqual(call["json"], {"query": queries.ME, "variables": {"x": 1}})

    def test_execute_sends_empty_variables_by_default(self) -> None:
        session = FakeSession.returning({})
        _client(session).execute("query { me { id } }")
        self.assertEqual(session.calls[0]["json"]["variables"], {})

    def test_http_error_carries_status_and_reason(self) -> None:
        session = FakeSession(lambda body: FakeResponse({}, status_code=401, reason="Unauthorized"))
        with self.assertRaises(MondayHTTPError) as ctx:
            _client(session).execute(queries.ME)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(str(ctx.exception), "HTTP 401: Unauthorized")

    def test_graphql_errors_are_joined(self) -> None:
        payload = {"errors": [{"message": "Field 'x' doesn't exist"}, {"message": "Rate limited"}], "data": None}
        session = FakeSession(lambda body: FakeResponse(payload))
        with self.assertRaises(MondayGraphQLError) as ctx:
            _client(session).execute(queries.ME)
        self.assertEqual(str(ctx.exception), "Field 'x' doesn't exist, Rate limited")
        self.assertEqual(len(ctx.exception.errors), 2)

    def test_non_json_body_is_an_api_error(self) -> None:
        session = FakeSession(lambda body: FakeResponse(NOT_JSON, text="<html>oops</html>"))
        with self.assertRaises(MondayAPIError):
            _client(session).execute(queries.ME)

    def test_missing_token_fails_before_any_request(self) -> None:
        session = FakeSession.returning({})
        with self.assertRaises(MondayAPIError) as ctx:
            _client(session, token="").execute(queries.ME)
        self.assertIn("MONDAY_API_TOKEN", str(ctx.exception))
        self.assertEqual(session.calls, [])

    def test_board_returns_first_or_none(self) -> None:
        session = FakeSession.returning({"boards": []})
        self.assertIsNone(_client(session).board("42"))
        self.assertEqual(session.calls[0]["json"]["variables"], {"boardId": "42"})

    def test_create_board_defaults_kind_to_public(self) -> None:
        session = FakeSession.returning({"create_board": {"id": "9", "name": "New"}})
        board = _client(session).create_board("New")
        self.assertEqual(board["id"], "9")
        self.assertEqual(
            session.calls[0]["json"]["variables"],
            {"boardName": "New", "boardKind": "public", "description": None},
        )

    def test_create_item_forwards_missing_fields_as_none(self) -> None:
        session = FakeSession.returning({"create_item": None})
        _client(session).create_item(None, None)
        self.assertEqual(
            session.calls[0]["json"]["variables"],
            {"boardId": None, "itemName": None, "groupId": None},
        )

    def test_update_item_rename_and_column_values(self) -> None:
        session = FakeSession.returning({
            "change_simple_column_value": {"id": "1", "name": "Renamed"},
            "change_multiple_column_values": {"id": "1", "name": "Item"},
        })
        client = _client(session)

        self.assertEqual(client.update_item("1", name="Renamed")["name"], "Renamed")
        self.assertIn("change_simple_column_value", session.queries[0])

        client.update_item("1", column_values={"status": {"label": "Done"}})
        variables = session.calls[1]["json"]["variables"]
        self.assertEqual(json.loads(variables["columnValues"]), {"status": {"label": "Done"}})

    def test_update_item_without_changes_is_rejected(self) -> None:
        session = FakeSession.returning({})
        with self.assertRaises(MondayAPIError):
            _client(session).update_item("1")
        self.assertEqual(session.calls, [])

    def test_activity_logs_limit_is_a_variable(self) -> None:
        session = FakeSession.returning({"activity_logs": [{"id": "a"}]})
        logs = _client(session).activity_logs(limit=100)
        self.assertEqual(logs, [{"id": "a"}])
        self.assertEqual(session.calls[0]["json"]["variables"], {"limit": 100})

    def test_set_timeline_encodes_column_values(self) -> None:
        session = FakeSession.returning({"change_multiple_column_values": {"id": "5"}})
        _client(session).set_timeline("b1", "5", {"timeline": {"from": "2025-01-01", "to": "2025-02-01"}})
        variables = session.calls[0]["json"]["variables"]
        self.assertEqual(variables["boardId"], "b1")
        self.assertEqual(json.loads(variables["columnValues"])["timeline"]["to"], "2025-02-01")


if __name__ == "__main__":
    unittest.main(verbosity=2)
