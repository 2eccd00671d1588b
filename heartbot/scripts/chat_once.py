from __future__ import annotations

import argparse
import json
from typing import Any, Sequence

from heartbot.advice.engine import build_report_for_message, greeting, handle_user_message
from heartbot.advice.formatter import format_clarification
from heartbot.advice.parser import parse_clinical_inputs
from heartbot.internal_core import load_config


def _prior_inputs(values: Sequence[str]) -> dict[str, Any]:
    prior: dict[str, Any] = {}
    for raw in values:
        if "=" not in raw:
            raise argparse.ArgumentTypeError(f"expected key=value, got: {raw!r}")
        parsed = parse_clinical_inputs(raw)
        if not parsed:
            raise argparse.ArgumentTypeError(f"unrecognized clinical input: {raw!r}")
        prior.update(parsed)
    return prior


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Send one message to the HeartBot advice engine.")
    parser.add_argument("text", nargs="?", default=None, help="Chat message, e.g. 'risk=22%%, age=60'.")
    parser.add_argument(
        "--prior",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Clinical input remembered from earlier turns (repeatable).",
    )
    parser.add_argument("--json", action="store_true", help="Print the structured report as JSON.")
    args = parser.parse_args(argv)

    if args.text is None:
        print(greeting())
        return 0

    try:
        prior = _prior_inputs(args.prior)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    max_tips = load_config().HEARTBOT_MAX_TIPS
    if not args.json:
        print(handle_user_message(args.text, prior, max_tips=max_tips))
        return 0

    report = build_report_for_message(args.text, prior, max_tips=max_tips)
    if report is None:
        payload: dict[str, Any] = {"matched": False, "reply": format_clarification()}
    else:
        payload = {
            "matched": True,
            "tier": report.tier.value,
            "percent": report.percent,
            "tips": list(report.tips),
            "inputs": dict(report.inputs),
            "reply": report.text,
        }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
