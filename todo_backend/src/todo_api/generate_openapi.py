"""
Utility script to generate and write the OpenAPI schema for the FastAPI app.

This script imports the FastAPI application instance and serializes its OpenAPI
schema to the interfaces/openapi.json file so that API clients and documentation
tools can consume a stable spec without running the server.

Usage:
    python -m src.todo_api.generate_openapi
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

from .main import app, openapi_tags

logger = logging.getLogger(__name__)


def _merge_tags(schema: Dict[str, Any]) -> None:
    """Add any tag from main.openapi_tags the generated schema lacks."""
    tags: List[Dict[str, Any]] = list(schema.get("tags") or [])
    known = {tag["name"] for tag in tags}
    tags.extend(tag for tag in openapi_tags if tag["name"] not in known)
    schema["tags"] = tags


def _default_output_path() -> str:
    # <container_root>/interfaces/openapi.json
    script_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))  # points to .../src
    container_root = os.path.dirname(script_dir)
    return os.path.join(container_root, "interfaces", "openapi.json")


# PUBLIC_INTERFACE
def generate_openapi(out_path: Optional[str] = None) -> str:
    """Write the OpenAPI schema to `out_path` (default interfaces/openapi.json) and return the path."""
    schema = app.openapi()
    _merge_tags(schema)

    path = out_path or _default_output_path()
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    logger.info("Wrote OpenAPI schema to %s", path)
    return path


if __name__ == "__main__":
    generate_openapi()
