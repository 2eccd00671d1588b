"""
HTTP boundary for HeartBot.

Design intent:
- Expose the advice engine to chat clients that are not written in Python.
- Keep request validation at the edge; the engine stays string-in, string-out.
"""
