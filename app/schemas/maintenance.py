"""Schemas for maintenance utilities."""

from __future__ import annotations

from pydantic import BaseModel


class SchemaFixOut(BaseModel):
    title: str
    description: str
    sql: str
    steps: list[str]
