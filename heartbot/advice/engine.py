from __future__ import annotations

"""
Chat-facing entry points for the risk-to-advice engine.

Design intent:
- Stay stateless: the caller owns conversation history and passes prior inputs.
- Return a well-formed reply for every input; failures are ordinary strings.
- Expose structured reports for callers that need more than the reply text.
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from heartbot.advice.formatter import (
    DEFAULT_MAX_TIPS,
    GREETING_TEXT,
    format_clarification,
    format_report,
    format_unknown_risk,
)
from heartbot.advice.generator import generate_tips
from heartbot.advice.parser import parse_message
from heartbot.advice.tiers import RiskTier, tier_from_keyword, tier_from_percent

logger = logging.getLogger(__name__)

MIN_PERCENT = 0.0
MAX_PERCENT = 100.0


@dataclass(frozen=True)
class AdviceReport:
    tier: RiskTier
    percent: float | None
    tips: tuple[str, ...]
    inputs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    text: str = ""


def greeting() -> str:
    return GREETING_TEXT


def handle_user_message(
    text: str,
    prior_inputs: Mapping[str, Any] | None = None,
    *,
    max_tips: int = DEFAULT_MAX_TIPS,
) -> str:
    """
    Reply to one chat message.

    A percentage anywhere in the text wins over a tier word. Inline `key=value`
    inputs override same-named `prior_inputs`. Text with neither a percentage nor
    a tier word gets the clarification prompt.
    """
    report = build_report_for_message(text, prior_inputs, max_tips=max_tips)
    if report is None:
        return format_clarification()
    return report.text


def build_report_for_message(
    text: str,
    prior_inputs: Mapping[str, Any] | None = None,
    *,
    max_tips: int = DEFAULT_MAX_TIPS,
) -> AdviceReport | None:
    """Parse one message into a structured report; None when it names no percentage or tier."""
    parsed = parse_message(text)
    merged = merge_inputs(prior_inputs, parsed.inputs)
    if parsed.percent is not None:
        return build_percent_report(parsed.percent, merged, max_tips=max_tips)
    tier = tier_from_keyword(parsed.risk_keyword)
    if tier is None:
        return None
    return build_tier_report(tier, merged, max_tips=max_tips)


def report_for_percent(
    percent: float,
    inputs: Mapping[str, Any] | None = None,
    *,
    max_tips: int = DEFAULT_MAX_TIPS,
) -> str:
    return build_percent_report(percent, inputs, max_tips=max_tips).text


def report_for_risk(
    risk: str,
    inputs: Mapping[str, Any] | None = None,
    *,
    max_tips: int = DEFAULT_MAX_TIPS,
) -> str:
    tier = tier_from_keyword(risk)
    if tier is None:
        logger.debug("advice_report unknown_risk chars=%s", len(str(risk or "")))
        return format_unknown_risk()
    return report_for_tier(tier, inputs, max_tips=max_tips)


def report_for_tier(
    tier: RiskTier,
    inputs: Mapping[str, Any] | None = None,
    *,
    max_tips: int = DEFAULT_MAX_TIPS,
) -> str:
    return build_tier_report(tier, inputs, max_tips=max_tips).text


def build_percent_report(
    percent: float,
    inputs: Mapping[str, Any] | None = None,
    *,
    max_tips: int = DEFAULT_MAX_TIPS,
) -> AdviceReport:
    clamped = clamp_percent(percent)
    return _build_report(tier_from_percent(clamped), clamped, inputs, max_tips=max_tips)


def build_tier_report(
    tier: RiskTier,
    inputs: Mapping[str, Any] | None = None,
    *,
    max_tips: int = DEFAULT_MAX_TIPS,
) -> AdviceReport:
    return _build_report(RiskTier(tier), None, inputs, max_tips=max_tips)


def clamp_percent(percent: float) -> float:
    value = float(percent)
    if math.isnan(value):
        return MIN_PERCENT
    return max(MIN_PERCENT, min(MAX_PERCENT, value))


def merge_inputs(
    prior_inputs: Mapping[str, Any] | None,
    inline_inputs: Mapping[str, Any] | None,
) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    if prior_inputs:
        merged.update(prior_inputs)
    if inline_inputs:
        merged.update(inline_inputs)
    return merged


def _build_report(
    tier: RiskTier,
    percent: float | None,
    inputs: Mapping[str, Any] | None,
    *,
    max_tips: int,
) -> AdviceReport:
    resolved_inputs = dict(inputs or {})
    tips = generate_tips(tier, resolved_inputs)
    text = format_report(tier, percent, tips, max_tips=max_tips)
    logger.debug(
        "advice_report tier=%s has_percent=%s tips=%s input_keys=%s",
        tier.value,
        percent is not None,
        len(tips),
        sorted(str(key) for key in resolved_inputs),
    )
    return AdviceReport(
        tier=tier,
        percent=percent,
        tips=tuple(tips),
        inputs=MappingProxyType(resolved_inputs),
        text=text,
    )
