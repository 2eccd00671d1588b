from __future__ import annotations

"""
HTTP surface for the HeartBot advice engine.

Design intent:
- Keep API orchestration thin and typed.
- Delegate every decision to heartbot.advice; the API only validates and wraps.
- Conversation history stays with the client and arrives as prior_inputs.
"""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from heartbot.advice.engine import (
    AdviceReport,
    build_percent_report,
    build_report_for_message,
    build_tier_report,
    greeting,
)
from heartbot.advice.formatter import format_clarification, format_unknown_risk
from heartbot.advice.tiers import RiskTier, tier_from_keyword
from heartbot.internal_core import load_config
from heartbot.internal_core.contracts import (
    AdviceResponse,
    ChatMessageRequest,
    GreetingResponse,
    PercentReportRequest,
    RiskReportRequest,
    TierReportRequest,
)

config = load_config()
logging.basicConfig(level=config.log_level_name())

app = FastAPI(title="heartbot advice service")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(config.HEARTBOT_CORS_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _max_tips() -> int:
    return load_config().HEARTBOT_MAX_TIPS


def _report_to_response(report: AdviceReport, *, source: str) -> AdviceResponse:
    return AdviceResponse(
        reply=report.text,
        matched=True,
        tier=report.tier.value,
        percent=report.percent,
        tips=list(report.tips),
        inputs=dict(report.inputs),
        debug={
            "source": source,
            "tip_count": len(report.tips),
            "input_keys": sorted(report.inputs),
        },
    )


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/chat/greeting", response_model=GreetingResponse)
async def chat_greeting() -> GreetingResponse:
    return GreetingResponse(reply=greeting())


@app.post("/chat/message", response_model=AdviceResponse)
async def chat_message(payload: ChatMessageRequest) -> AdviceResponse:
    limit = load_config().HEARTBOT_MAX_TEXT_CHARS
    if len(payload.text) > limit:
        raise HTTPException(status_code=413, detail=f"Message exceeds {limit} characters.")

    max_tips = _max_tips()
    report = build_report_for_message(payload.text, payload.prior_inputs, max_tips=max_tips)
    if report is None:
        logger.info("chat_message matched=false chars=%s", len(payload.text))
        return AdviceResponse(
            reply=format_clarification(),
            matched=False,
            debug={"source": "clarification"},
        )
    source = "percent" if report.percent is not None else "tier_keyword"
    logger.info(
        "chat_message matched=true source=%s tier=%s tips=%s",
        source,
        report.tier.value,
        len(report.tips),
    )
    return _report_to_response(report, source=source)


@app.post("/report/percent", response_model=AdviceResponse)
async def report_percent(payload: PercentReportRequest) -> AdviceResponse:
    report = build_percent_report(payload.percent, payload.inputs, max_tips=_max_tips())
    return _report_to_response(report, source="percent")


@app.post("/report/risk", response_model=AdviceResponse)
async def report_risk(payload: RiskReportRequest) -> AdviceResponse:
    tier = tier_from_keyword(payload.risk)
    if tier is None:
        return AdviceResponse(
            reply=format_unknown_risk(),
            matched=False,
            debug={"source": "unknown_risk"},
        )
    report = build_tier_report(tier, payload.inputs, max_tips=_max_tips())
    return _report_to_response(report, source="risk_keyword")


@app.post("/report/tier", response_model=AdviceResponse)
async def report_tier(payload: TierReportRequest) -> AdviceResponse:
    report = build_tier_report(RiskTier(payload.tier), payload.inputs, max_tips=_max_tips())
    return _report_to_response(report, source="tier")
