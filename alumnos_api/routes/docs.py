"""
Alumnos API: API Description Routes
===================================

What:  GET /options returns the API description base document.
How:   The document (options.json) is read once at startup by
       load_api_options(); create_app() also takes the generated OpenAPI
       title, version, description and servers from it.

The interactive UI (/api-docs) and the generated description
(/api-docs-json) are served by FastAPI itself; see create_app().
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from fastapi import APIRouter, Request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Docs"])


def load_api_options(path: str) -> Dict[str, Any]:
    """
    Read the API description base document.

    Raises:
        OSError / ValueError if the file is missing or not JSON; the
        application refuses to start without it.
    """
    options_file = Path(path)
    with options_file.open(encoding="utf-8") as f:
        options = json.load(f)
    logger.info("Loaded API options from %s", options_file)
    return options


@router.get(
    "/options",
    summary="Raw API description document",
    description="Returns the base document the generated API description is built from.",
)
async def get_options(request: Request) -> Dict[str, Any]:
    return request.app.state.api_options
