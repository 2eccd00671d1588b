"""
Risk-to-advice boundary for HeartBot.

Design intent:
- Turn a risk percentage or tier word plus optional clinical values into tips.
- Use conservative language (consider/ask/discuss).
- Avoid diagnosis; tips are prompts for a clinician conversation.
"""

from .engine import (
    AdviceReport,
    build_report_for_message,
    greeting,
    handle_user_message,
    report_for_percent,
    report_for_risk,
    report_for_tier,
)
from .tiers import RiskTier

__all__ = [
    "AdviceReport",
    "RiskTier",
    "build_report_for_message",
    "greeting",
    "handle_user_message",
    "report_for_percent",
    "report_for_risk",
    "report_for_tier",
]
