import uuid

import pytest


# ---------------- In-memory Supabase mock ----------------
class FakeTable:
    def __init__(self, name, db, calls):
        self.name = name
        self._data = db.setdefault(name, [])
        self._calls = calls
        self._filters = []
        self._order = None
        self._limit = None
        self._columns = "*"
        self._op = "select"
        self._payload = None

    def select(self, columns="*", *args, **kwargs):
        self._op = "select"
        self._columns = columns
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self._order = (column, bool(desc))
        return self

    def limit(self, n):
        self._limit = n
        return self

    def insert(self, item):
        self._op = "insert"
        self._payload = dict(item)
        return self

    def update(self, item):
        self._op = "update"
        self._payload = dict(item)
        return self

    def delete(self):
        self._op = "delete"
        return self

    def _matches(self, row):
        return all(row.get(col) == val for col, val in self._filters)

    def execute(self):
        self._calls.append((self.name, self._op, self._payload, list(self._filters)))
        if self._op == "insert":
            row = {"id": uuid.uuid4().hex, **self._payload}
            self._data.append(row)
            data = [dict(row)]
        elif self._op == "update":
            data = []
            for row in self._data:
                if self._matches(row):
                    row.update(self._payload)
                    data.append(dict(row))
        elif self._op == "delete":
            data = [dict(r) for r in self._data if self._matches(r)]
            self._data[:] = [r for r in self._data if not self._matches(r)]
        else:
            data = [dict(r) for r in self._data if self._matches(r)]
            if self._order:
                col, desc = self._order
                data.sort(key=lambda r: r.get(col) or "", reverse=desc)
            if self._limit is not None:
                data = data[: self._limit]
            if self._columns != "*":
                wanted = [c.strip() for c in self._columns.split(",")]
                data = [{c: r.get(c) for c in wanted} for r in data]
        return type("Res", (), {"data": data})()


class FakeClient:
    def __init__(self, db=None):
        self.db = db if db is not None else {}
        self.calls = []

    def table(self, name):
        return FakeTable(name, self.db, self.calls)


class FailingClient:
    """Every query raises the given PostgREST error on ``execute``."""

    def __init__(self, error):
        self.error = error

    def table(self, name):
        error = self.error

        class _Query:
            def __getattr__(self, attr):
                if attr == "execute":
                    def _raise():
                        raise error
                    return _raise
                return lambda *a, **k: self

        return _Query()


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def api_error():
    from postgrest.exceptions import APIError

    return APIError(
        {
            "message": "permission denied for table",
            "code": "42501",
            "hint": "check RLS policies",
            "details": "row level security",
        }
    )


@pytest.fixture
def failing_client(api_error):
    return FailingClient(api_error)
