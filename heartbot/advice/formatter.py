from __future__ import annotations

"""
Render advice reports into compact chat replies.

Design intent:
- Keep reply text deterministic for UI and test stability.
- Cap visible tips here, not in the generator.
"""

from typing import Sequence

from heartbot.advice.tiers import RiskTier, tier_label

DEFAULT_MAX_TIPS = 6
BULLET = "• "

GREETING_TEXT = (
    "Hi! Tell me your risk % and I’ll suggest next steps.\n"
    "You can say: risk=23%  or  23%  (also supports risk=low/moderate/high).\n"
    "Example: risk=22%, age=60, bp=150, chol=240"
)

CLARIFICATION_TEXT = (
    "Which risk should I use?\n"
    "Send a percentage like: 7%  or  risk=23%\n"
    "Or send a tier like: risk=low, risk=moderate, risk=high.\n"
    "Optionally add values (e.g., age=58, bp=142, chol=238)."
)

UNKNOWN_RISK_TEXT = (
    "Risk: Unknown\n"
    "Next:\n"
    f"{BULLET}Please provide a valid risk: percentage (e.g., 12%) or Low / Moderate / High."
)


def format_percent(percent: float) -> str:
    if float(percent).is_integer():
        return f"{percent:.0f}"
    return f"{percent:.1f}"


def format_report(
    tier: RiskTier,
    percent: float | None,
    tips: Sequence[str],
    *,
    max_tips: int = DEFAULT_MAX_TIPS,
) -> str:
    header = f"Risk: {tier_label(tier)}"
    if percent is not None:
        header = f"{header} ({format_percent(percent)}%)"
    bullets = [f"{BULLET}{tip}" for tip in list(tips)[: max(0, int(max_tips))]]
    return "\n".join([header, "Next:", *bullets])


def format_unknown_risk() -> str:
    return UNKNOWN_RISK_TEXT


def format_clarification() -> str:
    return CLARIFICATION_TEXT
