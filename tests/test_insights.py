from __future__ import annotations

from ehfms.insights import (
    INSIGHT_ERROR,
    INSIGHT_UNAVAILABLE,
    REMINDER_UNAVAILABLE,
    draft_payment_reminder,
    financial_insight_prompt,
    generate_financial_insight,
)
from ehfms.settings_store import Settings


class FakeClient:
    def __init__(self, reply=""):
        self.reply = reply
        self.calls: list[tuple[str, str, str]] = []

    def __call__(self, api_key, model):
        def _generate(prompt):
            self.calls.append((api_key, model, prompt))
            if isinstance(self.reply, Exception):
                raise self.reply
            return self.reply

        return _generate


def test_missing_key_degrades_gracefully(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    client = FakeClient("should not be used")

    assert generate_financial_insight(100, 50, 3, client_factory=client) == INSIGHT_UNAVAILABLE
    assert draft_payment_reminder("Alice", 300, "2024-05-10", client_factory=client) == REMINDER_UNAVAILABLE
    assert client.calls == []


def test_insight_uses_configured_client():
    client = FakeClient("Collections look healthy.")
    settings = Settings(insight_api_key="k", insight_model="test-model")

    text = generate_financial_insight(12000, 3000, 5, settings=settings, client_factory=client)

    assert text == "Collections look healthy."
    api_key, model, prompt = client.calls[0]
    assert (api_key, model) == ("k", "test-model")
    assert "Total Collected: ₹12,000" in prompt
    assert "Total Students: 5" in prompt


def test_client_errors_are_reported_as_text():
    settings = Settings(insight_api_key="k")
    assert generate_financial_insight(1, 1, 1, settings=settings, client_factory=FakeClient(RuntimeError("boom"))) == INSIGHT_ERROR
    assert draft_payment_reminder("A", 1, "x", settings=settings, client_factory=FakeClient("")) == "Could not draft reminder."


def test_prompt_mentions_the_recommendation():
    assert "actionable recommendation" in financial_insight_prompt(0, 0, 0)
