from types import SimpleNamespace

from teamstats.ui import confirm


def test_confirm_delete_opens_dialog(monkeypatch):
    opened = []

    def dialog(title):
        def _wrap(body):
            opened.append((title, body))
            return lambda: None
        return _wrap

    monkeypatch.setattr(confirm, "st", SimpleNamespace(dialog=dialog))

    confirm.confirm_delete("Gone for good.", lambda: None, key="matches__confirm_1")

    assert [title for title, _ in opened] == ["Are you absolutely sure?"]
