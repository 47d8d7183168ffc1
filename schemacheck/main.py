"""
FastAPI application entrypoint.

Run locally:  uvicorn schemacheck.main:app --reload
"""

import logging

from fastapi import FastAPI

from schemacheck.api.routes import router
from schemacheck.config import settings

logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s | %(name)s | %(message)s")

app = FastAPI(
    title="Schema Check API",
    description=(
        "JSON Schema validation (draft-04, draft-06, draft-07) with "
        "path-labelled error messages, local and external $ref resolution."
    ),
    version="1.0.0",
)

app.include_router(router, prefix="/api/v1")
