import httpx
import pytest

from teamstats.utils import supa
from teamstats.utils.supa import SupabaseConfigError, SupabaseConnectionError, first_row


def test_first_row_basic():
    class Resp:
        def __init__(self, data):
            self.data = data
    assert first_row(Resp([{"a": 1}])) == {"a": 1}
    assert first_row(Resp([])) is None
    assert first_row(None) is None


@pytest.fixture
def supabase_env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")


def test_missing_config_raises(monkeypatch):
    monkeypatch.setattr(supa, "supabase_settings", lambda: (None, None))
    with pytest.raises(SupabaseConfigError, match="Supabase secrets missing"):
        supa._create_supabase_client()  # pylint: disable=protected-access


def test_create_supabase_client_http_status_error(monkeypatch, supabase_env):
    request = httpx.Request("GET", "https://example.supabase.co")
    response = httpx.Response(404, request=request, text="Not Found")

    def _raise_http_status(*args, **kwargs):  # pragma: no cover - helper for test
        raise httpx.HTTPStatusError("not found", request=request, response=response)

    monkeypatch.setattr(supa, "create_client", _raise_http_status)

    with pytest.raises(SupabaseConfigError) as excinfo:
        supa._create_supabase_client()  # pylint: disable=protected-access

    assert "HTTP 404" in str(excinfo.value)


def test_create_supabase_client_connection_error(monkeypatch, supabase_env):
    def _raise_connect(*args, **kwargs):
        raise httpx.ConnectError("boom")

    monkeypatch.setattr(supa, "create_client", _raise_connect)

    with pytest.raises(SupabaseConnectionError, match="Unable to reach Supabase"):
        supa._create_supabase_client()  # pylint: disable=protected-access


def test_create_supabase_client_passes_settings(monkeypatch, supabase_env):
    seen = {}

    def _fake_create(url, key, options=None):
        seen.update(url=url, key=key, options=options)
        return "client"

    monkeypatch.setattr(supa, "create_client", _fake_create)

    assert supa._create_supabase_client() == "client"  # pylint: disable=protected-access
    assert seen["url"] == "https://example.supabase.co"
    assert seen["key"] == "anon-key"
    assert seen["options"].httpx_client is not None
