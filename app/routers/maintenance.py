"""Maintenance utilities: the copy-paste schema fix script."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.schemas.maintenance import SchemaFixOut
from app.services.schema_fix import DESCRIPTION, STEPS, TITLE, get_schema_fix_sql

router = APIRouter()


@router.get("/schema-fix", response_model=SchemaFixOut)
def get_schema_fix() -> SchemaFixOut:
    return SchemaFixOut(title=TITLE, description=DESCRIPTION, sql=get_schema_fix_sql(), steps=list(STEPS))


@router.get("/schema-fix.sql", response_class=PlainTextResponse)
def get_schema_fix_script() -> PlainTextResponse:
    return PlainTextResponse(get_schema_fix_sql(), media_type="text/plain; charset=utf-8")
