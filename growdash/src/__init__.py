"""
Grow dashboard package.

Polls a plant sensor (remote JSON endpoint or synthetic generator), keeps
rolling per-metric windows, evaluates rule-based cultivation advice, and
hands each update to a renderer (log output or the HTTP API).

CHANGELOG:
- 2026-10-19: Initial creation (STORY-001)

TODO:
- None
"""
