from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

TierName = Literal["low", "moderate", "high"]


class ChatMessageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    text: str = Field(max_length=20000)
    prior_inputs: Dict[str, Any] = Field(default_factory=dict)


class PercentReportRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    percent: float = Field(allow_inf_nan=False)
    inputs: Dict[str, Any] = Field(default_factory=dict)


class RiskReportRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    risk: str = Field(max_length=256)
    inputs: Dict[str, Any] = Field(default_factory=dict)


class TierReportRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tier: TierName
    inputs: Dict[str, Any] = Field(default_factory=dict)


class GreetingResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reply: str


class AdviceResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reply: str
    matched: bool
    tier: Optional[TierName] = None
    percent: Optional[float] = None
    tips: List[str] = Field(default_factory=list)
    inputs: Dict[str, Any] = Field(default_factory=dict)
    debug: Dict[str, Any] = Field(default_factory=dict)
