"""
HTTP surface for the grow dashboard.

A FastAPI application that owns the polling pipeline and exposes the latest
frame plus the configuration surface (endpoint, mock toggle, interval,
manual fetch) to a browser front end.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-010)

TODO:
- None
"""
