"""Optional AI-written summaries and reminders.

The text comes from an external model. Without a configured key every call returns a
fixed "unavailable" message instead of failing.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .settings_store import Settings

log = logging.getLogger(__name__)

INSIGHT_UNAVAILABLE = "AI Insight unavailable (Configuration missing)."
REMINDER_UNAVAILABLE = "Reminder unavailable (Configuration missing)."
INSIGHT_ERROR = "Error generating insight."
REMINDER_ERROR = "Error drafting reminder."

# (api_key, model_name) -> function that turns a prompt into text
ClientFactory = Callable[[str, str], Callable[[str], str]]


def gemini_client(api_key: str, model_name: str) -> Callable[[str], str]:
    import google.generativeai as genai  # type: ignore

    genai.configure(api_key=api_key)
    model = genai.GenerativeModel(model_name)

    def _generate(prompt: str) -> str:
        return getattr(model.generate_content(prompt), "text", "") or ""

    return _generate


def financial_insight_prompt(total_collected: float, total_pending: float, student_count: int) -> str:
    return (
        "You are a financial analyst for a school.\n"
        "Here is the current fee status:\n"
        f"- Total Collected: ₹{total_collected:,.0f}\n"
        f"- Total Pending: ₹{total_pending:,.0f}\n"
        f"- Total Students: {student_count}\n\n"
        "Provide a brief, professional 3-sentence summary of the financial health and one "
        "actionable recommendation for improving fee collection."
    )


def payment_reminder_prompt(student_name: str, amount_due: float, due_date: str) -> str:
    return (
        "Draft a polite but firm email reminder for school fees.\n"
        f"Student: {student_name}\n"
        f"Amount Due: ₹{amount_due:,.0f}\n"
        f"Due Date: {due_date}\n\n"
        "Keep it under 100 words."
    )


def _ask(
    prompt: str,
    settings: Settings,
    unavailable: str,
    failed: str,
    fallback: str,
    client_factory: Optional[ClientFactory],
) -> str:
    api_key = settings.resolve_api_key()
    if not api_key:
        return unavailable
    factory = client_factory or gemini_client
    try:
        text = factory(api_key, settings.insight_model)(prompt)
    except Exception:
        log.exception("Insight request failed")
        return failed
    return text or fallback


def generate_financial_insight(
    total_collected: float,
    total_pending: float,
    student_count: int,
    settings: Settings | None = None,
    client_factory: Optional[ClientFactory] = None,
) -> str:
    return _ask(
        financial_insight_prompt(total_collected, total_pending, student_count),
        settings or Settings(),
        INSIGHT_UNAVAILABLE,
        INSIGHT_ERROR,
        "Could not generate insight.",
        client_factory,
    )


def draft_payment_reminder(
    student_name: str,
    amount_due: float,
    due_date: str,
    settings: Settings | None = None,
    client_factory: Optional[ClientFactory] = None,
) -> str:
    return _ask(
        payment_reminder_prompt(student_name, amount_due, due_date),
        settings or Settings(),
        REMINDER_UNAVAILABLE,
        REMINDER_ERROR,
        "Could not draft reminder.",
        client_factory,
    )
