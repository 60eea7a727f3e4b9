"""
Core utilities shared across the club API.

This package hosts:
- configuration helpers (env vars, data paths, remote store credentials)
- cross-cutting services such as logging setup, password hashing,
  rate limiting and realtime event broadcasting.

Routers and services depend on these primitives instead of reading the
environment or touching WebSocket connections directly.
"""
