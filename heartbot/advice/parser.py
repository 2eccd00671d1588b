from __future__ import annotations

"""
Parse free-form chat text into a risk value and optional clinical inputs.

Design intent:
- Keep every pattern a named, independently testable unit.
- Try percentage patterns before tier words; first match wins.
- Treat malformed fragments as absent rather than as errors.
"""

import math
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union


Number = Union[int, float]

RISK_PERCENT_SIGN_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)\s*%")
RISK_PERCENT_ASSIGN_RE = re.compile(r"\brisk\s*=\s*([0-9]+(?:\.[0-9]+)?)\b", re.IGNORECASE)
RISK_PERCENT_SPACED_RE = re.compile(r"\brisk\s+([0-9]+(?:\.[0-9]+)?)\b", re.IGNORECASE)
BARE_NUMBER_RE = re.compile(r"^\s*([0-9]+(?:\.[0-9]+)?)\s*$")

RISK_KEYWORD_ASSIGN_RE = re.compile(r"\brisk\s*=\s*(high|moderate|medium|low)\b", re.IGNORECASE)
HIGH_RISK_PHRASE_RE = re.compile(r"\bhigh\s+risk\b|\brisk\s+high\b", re.IGNORECASE)
MODERATE_RISK_PHRASE_RE = re.compile(
    r"\b(?:moderate|medium)\s+risk\b|\brisk\s+(?:moderate|medium)\b",
    re.IGNORECASE,
)
LOW_RISK_PHRASE_RE = re.compile(r"\blow\s+risk\b|\brisk\s+low\b", re.IGNORECASE)

_RISK_PERCENT_PATTERNS = (
    RISK_PERCENT_SIGN_RE,
    RISK_PERCENT_ASSIGN_RE,
    RISK_PERCENT_SPACED_RE,
    BARE_NUMBER_RE,
)
_RISK_PHRASE_PATTERNS = (
    ("high", HIGH_RISK_PHRASE_RE),
    ("moderate", MODERATE_RISK_PHRASE_RE),
    ("low", LOW_RISK_PHRASE_RE),
)

_TOKEN_SPLIT_RE = re.compile(r"[,\s]+")
_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]")

FIELD_ALIASES = MappingProxyType(
    {
        "gender": "sex",
        "bp": "trestbps",
        "sbp": "trestbps",
        "restingbp": "trestbps",
        "cholesterol": "chol",
        "tc": "chol",
        "hr": "thalach",
        "maxhr": "thalach",
        "heart_rate": "thalach",
        "heartrate": "thalach",
    }
)

CLINICAL_FIELDS = frozenset(
    {
        "age",
        "sex",
        "trestbps",
        "chol",
        "fbs",
        "exang",
        "cp",
        "restecg",
        "oldpeak",
        "slope",
        "thalach",
    }
)

GLUCOSE_KEY = "glucose"
FASTING_GLUCOSE_CUTOFF = 120.0
_FLOAT_FIELDS = frozenset({"oldpeak"})


@dataclass(frozen=True)
class ParsedMessage:
    percent: float | None = None
    risk_keyword: str | None = None
    inputs: dict[str, Number] = field(default_factory=dict)


def parse_message(text: str) -> ParsedMessage:
    """Holds at most one of percent / risk_keyword; inputs are parsed independently."""
    inputs = parse_clinical_inputs(text)
    percent = parse_risk_percent(text)
    if percent is not None:
        return ParsedMessage(percent=percent, inputs=inputs)
    return ParsedMessage(risk_keyword=parse_risk_keyword(text), inputs=inputs)


def parse_risk_percent(text: str) -> float | None:
    """
    Extract a risk percentage.

    Accepts `23%`, `risk=23`, `risk 7.5` and a message holding only a number.
    The value is returned as written; clamping happens when a report is built.
    """
    source = str(text or "")
    for pattern in _RISK_PERCENT_PATTERNS:
        match = pattern.search(source)
        if match is None:
            continue
        try:
            return float(match.group(1))
        except ValueError:
            continue
    return None


def parse_risk_keyword(text: str) -> str | None:
    source = str(text or "")
    match = RISK_KEYWORD_ASSIGN_RE.search(source)
    if match is not None:
        return _normalize_keyword(match.group(1))
    for keyword, pattern in _RISK_PHRASE_PATTERNS:
        if pattern.search(source):
            return keyword
    return None


def canonical_field_name(key: str) -> str:
    normalized = str(key or "").strip().lower()
    return FIELD_ALIASES.get(normalized, normalized)


def parse_clinical_inputs(text: str) -> dict[str, Number]:
    """
    Parse `key=value` clinical inputs such as `age=60, bp=150, glucose=130`.

    `glucose` is folded into the binary `fbs` flag, `oldpeak` stays a float and
    every other field is rounded to an int. Unknown keys and values that do not
    parse are skipped.
    """
    out: dict[str, Number] = {}
    tokens = [item for item in _TOKEN_SPLIT_RE.split(str(text or "").lower()) if "=" in item]
    for token in tokens:
        raw_key, _, raw_value = token.partition("=")
        key = canonical_field_name(raw_key)
        if not key:
            continue
        value = parse_number(raw_value)
        if value is None:
            continue

        if key == GLUCOSE_KEY:
            out["fbs"] = 1 if float(value) > FASTING_GLUCOSE_CUTOFF else 0
            continue
        if key not in CLINICAL_FIELDS:
            continue
        if key in _FLOAT_FIELDS:
            out[key] = float(value)
            continue
        out[key] = round_half_away_from_zero(value)
    return out


def parse_number(raw: str) -> Number | None:
    clean = _NON_NUMERIC_RE.sub("", str(raw or ""))
    if not clean:
        return None
    try:
        value = float(clean)
    except ValueError:
        return None
    # Digit runs too long for a float come back as inf; drop them.
    if not math.isfinite(value):
        return None
    if "." in clean:
        return value
    return int(clean)


def round_half_away_from_zero(value: Number) -> int:
    if isinstance(value, int):
        return value
    magnitude = math.floor(abs(value) + 0.5)
    return int(-magnitude if value < 0 else magnitude)


def _normalize_keyword(raw: str) -> str:
    keyword = raw.strip().lower()
    return "moderate" if keyword == "medium" else keyword
