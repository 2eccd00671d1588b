from __future__ import annotations

"""
Build ordered advisory tips for a risk tier.

Design intent:
- Keep tips deterministic and explainable: one headline, rule-driven nudges,
  one closing habit line.
- Use conservative, non-diagnostic language (consider/ask/discuss).
- Leave display truncation to the formatter.
"""

import math
from typing import Any, Mapping, Sequence

from heartbot.advice.parser import round_half_away_from_zero
from heartbot.advice.tiers import RiskTier, ensure_tier_table


_GENERIC_TIPS = ensure_tier_table(
    {
        RiskTier.HIGH: (
            "Book a cardiology visit soon (ECG/echo ± stress test).",
            "If symptoms are severe (crushing chest pain, breathless, faint), seek urgent care.",
            "Start lifestyle changes now: activity, diet, stop smoking.",
            "Track BP, cholesterol, and glucose; address any high values.",
        ),
        RiskTier.MODERATE: (
            "Schedule a clinician review to plan prevention and monitoring.",
            "Track BP, lipids, and glucose; improve diet and activity.",
            "Build consistent exercise (≥150 min/week) and sleep routine.",
        ),
        RiskTier.LOW: (
            "Maintain healthy habits; recheck BP/lipids/glucose periodically.",
            "Know warning signs (new/worsening chest pain, breathlessness).",
            "Keep active and prioritize a plant-forward diet; avoid smoking.",
        ),
    },
    "_GENERIC_TIPS",
)

_HEADLINE_TIPS = ensure_tier_table(
    {
        RiskTier.HIGH: (
            "Book a cardiology visit soon (ECG/echo ± stress test). "
            "If chest pain is severe or you’re breathless, seek urgent care."
        ),
        RiskTier.MODERATE: "Arrange a clinician review to plan prevention, meds if needed, and follow-up.",
        RiskTier.LOW: "Keep healthy habits and recheck basic metrics periodically.",
    },
    "_HEADLINE_TIPS",
)

TIP_BP_HIGH = "Blood pressure is high—keep a home BP log and discuss treatment."
TIP_BP_BORDERLINE = "BP borderline—aim <130/80 with salt reduction and activity."
TIP_CHOL_HIGH = "Cholesterol ≥240—ask about a full lipid panel and statin options."
TIP_CHOL_BORDERLINE = "Cholesterol borderline—optimize diet; recheck in 3–6 months."
TIP_FASTING_GLUCOSE = "Fasting sugar >120—consider HbA1c testing and a glucose plan."
TIP_EXERTIONAL_PAIN = "Chest pain on exertion—pause strenuous exercise; consider a supervised stress test."
TIP_CHEST_PAIN_LOG = "Log chest-pain triggers/duration and share with your clinician."
TIP_ECG_CHANGES = "ECG/ST changes—have a clinician interpret to rule out ischemia."
TIP_LOW_CAPACITY = "Max heart rate lower than expected—ask about a supervised exercise test."
TIP_AGE_RISK = "Age increases baseline risk—focus on BP, lipids, glucose, and activity."
TIP_CORE_HABITS = "Core habits: 150 min/week activity, more plants/fiber, less salt/alcohol, no smoking."

BP_HIGH_MMHG = 140
BP_BORDERLINE_MMHG = 130
CHOL_HIGH_MG_DL = 240
CHOL_BORDERLINE_MG_DL = 200
OLDPEAK_ISCHEMIA_MM = 2.0
DOWNSLOPING_ST = 2
MIN_PREDICTED_MAX_HR = 120
LOW_CAPACITY_PERCENT = 70
MALE_RISK_AGE = 55
FEMALE_RISK_AGE = 65


def generate_tips(tier: RiskTier, inputs: Mapping[str, Any] | None = None) -> list[str]:
    """
    Return the ordered, de-duplicated tip list for a tier.

    Without inputs the tier's generic tips are returned. With inputs the list is
    headline tip, then every triggered rule in a fixed order, then the closing
    habits tip. The list is not capped.
    """
    tier = RiskTier(tier)
    if not inputs:
        return generic_tips(tier)
    return _dedupe(_input_aware_tips(tier, inputs))


def generic_tips(tier: RiskTier) -> list[str]:
    return list(_GENERIC_TIPS[RiskTier(tier)])


def headline_tip(tier: RiskTier) -> str:
    return _HEADLINE_TIPS[RiskTier(tier)]


def predicted_max_heart_rate(age: int) -> int:
    return max(MIN_PREDICTED_MAX_HR, 220 - age)


def _input_aware_tips(tier: RiskTier, inputs: Mapping[str, Any]) -> list[str]:
    age = _read_int(inputs, "age")
    sex = _read_int(inputs, "sex")
    trestbps = _read_int(inputs, "trestbps")
    chol = _read_int(inputs, "chol")
    fbs = _read_int(inputs, "fbs")
    exang = _read_int(inputs, "exang")
    cp = _read_int(inputs, "cp")
    restecg = _read_int(inputs, "restecg")
    oldpeak = _read_float(inputs, "oldpeak")
    slope = _read_int(inputs, "slope")
    thalach = _read_int(inputs, "thalach")

    tips = [headline_tip(tier)]

    if trestbps >= BP_HIGH_MMHG:
        tips.append(TIP_BP_HIGH)
    elif trestbps >= BP_BORDERLINE_MMHG:
        tips.append(TIP_BP_BORDERLINE)

    if chol >= CHOL_HIGH_MG_DL:
        tips.append(TIP_CHOL_HIGH)
    elif chol >= CHOL_BORDERLINE_MG_DL:
        tips.append(TIP_CHOL_BORDERLINE)

    if fbs == 1:
        tips.append(TIP_FASTING_GLUCOSE)
    if exang == 1:
        tips.append(TIP_EXERTIONAL_PAIN)
    if cp > 0:
        tips.append(TIP_CHEST_PAIN_LOG)

    if restecg >= 1 or oldpeak >= OLDPEAK_ISCHEMIA_MM or slope == DOWNSLOPING_ST:
        tips.append(TIP_ECG_CHANGES)

    # Integer math; inputs may exceed float range.
    if thalach > 0 and 100 * thalach < LOW_CAPACITY_PERCENT * predicted_max_heart_rate(age):
        tips.append(TIP_LOW_CAPACITY)

    if (sex == 1 and age >= MALE_RISK_AGE) or (sex == 0 and age >= FEMALE_RISK_AGE):
        tips.append(TIP_AGE_RISK)

    tips.append(TIP_CORE_HABITS)
    return tips


def _read_float(inputs: Mapping[str, Any], key: str) -> float:
    value = inputs.get(key)
    if isinstance(value, bool):
        return float(value)
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            number = float(str(value if value is not None else "0").strip())
    except (ValueError, OverflowError):
        return 0.0
    # Non-finite values read as zero.
    return number if math.isfinite(number) else 0.0


def _read_int(inputs: Mapping[str, Any], key: str) -> int:
    value = inputs.get(key)
    if isinstance(value, int):
        return int(value)
    return round_half_away_from_zero(_read_float(inputs, key))


def _dedupe(tips: Sequence[str]) -> list[str]:
    out: list[str] = []
    seen: set[str] = set()
    for tip in tips:
        if tip in seen:
            continue
        seen.add(tip)
        out.append(tip)
    return out
