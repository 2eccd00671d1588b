import logging

import pytest

from heartbot.advice import (
    RiskTier,
    build_report_for_message,
    greeting,
    handle_user_message,
    report_for_percent,
    report_for_risk,
    report_for_tier,
)
from heartbot.advice.engine import build_percent_report, clamp_percent, merge_inputs
from heartbot.advice.formatter import CLARIFICATION_TEXT, UNKNOWN_RISK_TEXT
from heartbot.advice.generator import (
    TIP_BP_HIGH,
    TIP_CHOL_HIGH,
    TIP_ECG_CHANGES,
    generic_tips,
    headline_tip,
)


def test_greeting_describes_accepted_formats() -> None:
    text = greeting()
    assert "risk=23%" in text
    assert "risk=low/moderate/high" in text


def test_report_for_percent_fractional_uses_numeric_threshold() -> None:
    text = report_for_percent(22.5)
    assert text.startswith("Risk: High (22.5%)\nNext:\n")
    for tip in generic_tips(RiskTier.HIGH):
        assert f"• {tip}" in text


def test_report_for_percent_whole_number_has_no_decimals() -> None:
    text = report_for_percent(20)
    assert text.splitlines()[0] == "Risk: High (20%)"


def test_report_for_percent_clamps_out_of_range_values() -> None:
    assert report_for_percent(150).splitlines()[0] == "Risk: High (100%)"
    assert report_for_percent(-3).splitlines()[0] == "Risk: Low (0%)"
    assert clamp_percent(float("nan")) == 0.0
    assert clamp_percent(float("inf")) == 100.0


def test_handle_user_message_example_with_inputs() -> None:
    text = handle_user_message("risk=23%, age=60, bp=150, chol=240")
    lines = text.splitlines()
    assert lines[0] == "Risk: High (23%)"
    assert lines[2] == f"• {headline_tip(RiskTier.HIGH)}"
    assert f"• {TIP_BP_HIGH}" in lines
    assert f"• {TIP_CHOL_HIGH}" in lines


def test_handle_user_message_keyword_path() -> None:
    text = handle_user_message("risk=high")
    assert text.splitlines()[0] == "Risk: High"
    assert "%" not in text.splitlines()[0]

    medium = handle_user_message("my doctor said medium risk")
    assert medium.splitlines()[0] == "Risk: Moderate"


def test_handle_user_message_without_risk_returns_clarification() -> None:
    assert handle_user_message("hello there") == CLARIFICATION_TEXT
    assert handle_user_message("") == CLARIFICATION_TEXT
    assert handle_user_message("age=60, bp=150") == CLARIFICATION_TEXT


def test_handle_user_message_merges_prior_inputs_with_inline_override() -> None:
    prior = {"trestbps": 120, "restecg": 1}
    text = handle_user_message("12%, bp=150", prior_inputs=prior)
    assert f"• {TIP_BP_HIGH}" in text
    assert f"• {TIP_ECG_CHANGES}" in text
    assert prior == {"trestbps": 120, "restecg": 1}


def test_handle_user_message_with_prior_inputs_only_uses_input_aware_tips() -> None:
    text = handle_user_message("4%", prior_inputs={"chol": 260})
    assert text.splitlines()[2] == f"• {headline_tip(RiskTier.LOW)}"
    assert f"• {TIP_CHOL_HIGH}" in text


def test_report_for_risk_unknown_word_never_defaults() -> None:
    assert report_for_risk("banana") == UNKNOWN_RISK_TEXT
    assert report_for_risk("") == UNKNOWN_RISK_TEXT


def test_report_for_risk_and_tier_agree() -> None:
    assert report_for_risk("Severe") == report_for_tier(RiskTier.HIGH)
    assert report_for_risk("mild", {"age": 70}) == report_for_tier(RiskTier.LOW, {"age": 70})


def test_report_display_is_capped_at_six_tips() -> None:
    inputs = {
        "age": 60,
        "sex": 1,
        "trestbps": 145,
        "chol": 250,
        "fbs": 1,
        "exang": 1,
        "cp": 2,
        "restecg": 1,
        "thalach": 100,
    }
    report = build_percent_report(30, inputs)
    assert len(report.tips) == 10
    assert len([line for line in report.text.splitlines() if line.startswith("• ")]) == 6


def test_build_report_for_message_structured_result() -> None:
    report = build_report_for_message("risk 7.5, glucose=150", prior_inputs={"age": 50})
    assert report is not None
    assert report.tier is RiskTier.MODERATE
    assert report.percent == pytest.approx(7.5)
    assert report.inputs == {"age": 50, "fbs": 1}
    assert report.text == handle_user_message("risk 7.5, glucose=150", prior_inputs={"age": 50})

    assert build_report_for_message("hello there") is None


def test_repeated_calls_are_stateless() -> None:
    first = handle_user_message("risk=23%, age=60, bp=150, chol=240")
    handle_user_message("risk=low, bp=170")
    assert handle_user_message("risk=23%, age=60, bp=150, chol=240") == first


def test_merge_inputs_handles_missing_sides() -> None:
    assert merge_inputs(None, None) == {}
    assert merge_inputs({"age": 40}, {"age": 41, "chol": 210}) == {"age": 41, "chol": 210}


def test_report_logs_debug_line_without_raw_text(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="heartbot.advice.engine"):
        handle_user_message("risk=9%, bp=150 secret-note")
    messages = [record.getMessage() for record in caplog.records]
    assert any("advice_report tier=moderate" in message for message in messages)
    assert not any("secret-note" in message for message in messages)


_HUGE = "9" * 400


@pytest.mark.parametrize(
    "fragment",
    [
        f"oldpeak={_HUGE}",
        f"glucose={_HUGE}",
        f"age=-{_HUGE}, thalach=100",
        f"thalach={_HUGE}",
        f"oldpeak={_HUGE}.5, bp={_HUGE}",
    ],
)
def test_handle_user_message_replies_for_oversized_inline_values(fragment: str) -> None:
    assert handle_user_message(f"risk=10%, {fragment}").startswith("Risk: Moderate (10%)\nNext:\n")
    assert handle_user_message(f"risk=high, {fragment}").startswith("Risk: High\nNext:\n")


@pytest.mark.parametrize(
    "prior",
    [
        {"oldpeak": int(_HUGE)},
        {"age": -int(_HUGE), "thalach": 100},
        {"thalach": int(_HUGE), "age": int(_HUGE)},
        {"oldpeak": _HUGE, "chol": float("inf"), "trestbps": float("nan")},
    ],
)
def test_handle_user_message_replies_for_oversized_prior_values(prior) -> None:
    text = handle_user_message("risk=3%", prior_inputs=prior)
    assert text.startswith("Risk: Low (3%)\nNext:\n")


def test_handle_user_message_text_matches_structured_report() -> None:
    for message in ("risk=23%, bp=150", "medium risk, chol=210", "9", "risk=low"):
        report = build_report_for_message(message, prior_inputs={"age": 58, "sex": 1})
        assert report is not None
        assert handle_user_message(message, prior_inputs={"age": 58, "sex": 1}) == report.text


def test_advice_report_contents_are_read_only() -> None:
    report = build_percent_report(12, {"chol": 210})
    assert isinstance(report.tips, tuple)
    with pytest.raises(TypeError):
        report.inputs["chol"] = 100  # type: ignore[index]
    assert report.inputs == {"chol": 210}
