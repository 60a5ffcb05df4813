import pytest
import requests

from tools import suggestion_notifier
from tools.suggestion_notifier import submit_food_suggestion


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")


@pytest.fixture
def sent(monkeypatch):
    """Capture outgoing POSTs instead of hitting the network."""
    calls = []

    def fake_post(url, json=None, timeout=None):
        calls.append({"url": url, "json": json, "timeout": timeout})
        return FakeResponse(200)

    monkeypatch.setattr(suggestion_notifier.requests, "post", fake_post)
    monkeypatch.setitem(suggestion_notifier.NOTIFIER_CONFIG, "webhook_url", "https://hooks.example.test/suggest")
    return calls


def test_blank_name_is_rejected_without_request(sent):
    for name in ["", "   ", None]:
        result = submit_food_suggestion(name, "please add")
        assert result["status"] == "error"
        assert "required" in result["error_message"]
    assert sent == []


def test_suggestion_is_posted(sent):
    result = submit_food_suggestion("  Misal Pav ", "Pune special")
    assert result == {"status": "success", "food_name": "Misal Pav"}
    assert sent == [{
        "url": "https://hooks.example.test/suggest",
        "json": {"foodName": "Misal Pav", "comment": "Pune special"},
        "timeout": 10,
    }]


def test_comment_is_optional(sent):
    submit_food_suggestion("thepla")
    assert sent[0]["json"] == {"foodName": "thepla", "comment": None}


def test_delivery_failure_returns_error(monkeypatch, sent):
    monkeypatch.setattr(suggestion_notifier.requests, "post", lambda url, json=None, timeout=None: FakeResponse(500))
    result = submit_food_suggestion("thepla")
    assert result["status"] == "error"
    assert "500" in result["error_message"]


def test_missing_webhook_url(monkeypatch):
    monkeypatch.setitem(suggestion_notifier.NOTIFIER_CONFIG, "webhook_url", None)
    result = submit_food_suggestion("thepla")
    assert result["status"] == "error"
