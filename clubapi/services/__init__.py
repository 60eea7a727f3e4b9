"""
High-level use cases for the club API.

Each service module orchestrates the DocumentStore to implement business
rules (unique jersey numbers, unique admin usernames, protected super
admins, newest-first news, ...).

Routers (FastAPI endpoints) call these services instead of reading or
writing documents directly.
"""
