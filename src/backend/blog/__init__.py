"""Persistence layer for the blog: ORM models, repositories and transaction helpers."""
