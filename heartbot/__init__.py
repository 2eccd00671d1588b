"""
HeartBot backend package.

Design intent:
- Host the deterministic risk-to-advice engine behind a thin service shell.
- Keep the advice domain (parser/tiers/generator/formatter) free of I/O.
"""
