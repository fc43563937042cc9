"""In-memory stand-in for requests.Session used by the client tests."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

NOT_JSON = object()


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, reason: str = "OK", text: str = "") -> None:
        self._payload = payload
        self.status_code = status_code
        self.reason = reason
        self.text = text

    def json(self) -> Any:
        if self._payload is NOT_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


def data_response(data: Dict[str, Any]) -> FakeResponse:
    return FakeResponse({"data": data})


class FakeSession:
    """
    `responder` maps the posted GraphQL body to a FakeResponse.
    Every call is recorded in `calls` as {"url", "headers", "json", "timeout"}.
    """

    def __init__(self, responder: Callable[[Dict[str, Any]], FakeResponse]) -> None:
        self.responder = responder
        self.calls: List[Dict[str, Any]] = []

    @classmethod
    def returning(cls, data: Dict[str, Any]) -> "FakeSession":
        return cls(lambda body: data_response(data))

    @classmethod
    def routed(cls, routes: Dict[str, Dict[str, Any]], default: Optional[Dict[str, Any]] = None) -> "FakeSession":
        """First route whose key appears in the query text wins."""

        def respond(body: Dict[str, Any]) -> FakeResponse:
            query = body.get("query") or ""
            for needle, data in routes.items():
                if needle in query:
                    return data_response(data)
            if default is None:
                raise AssertionError(f"Unexpected query: {query}")
            return data_response(default)

        return cls(respond)

    def post(self, url: str, headers: Optional[dict] = None, json: Any = None, timeout: Any = None) -> FakeResponse:
        self.calls.append({"url": url, "headers": headers or {}, "json": json, "timeout": timeout})
        return self.responder(json or {})

    @property
    def queries(self) -> List[str]:
        return [c["json"]["query"] for c in self.calls]
