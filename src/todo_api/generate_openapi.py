"""
Utility script to export the OpenAPI schema of the Todo API.

The schema is generated from the application object without starting the
server or connecting to MongoDB, so API clients and documentation tools can
consume a stable document.

Usage:
    python -m todo_api.generate_openapi [OUTPUT_PATH]

OUTPUT_PATH defaults to interfaces/openapi.json in the current directory.
"""
from __future__ import annotations

import json
import os
import sys
from typing import Any, Dict, List, Optional

from .main import app, openapi_tags

DEFAULT_OUTPUT = os.path.join("interfaces", "openapi.json")


def _ensure_tags(schema: Dict[str, Any]) -> None:
    """
    Add any tag from openapi_tags missing from the schema's tag metadata.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in openapi_tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


# PUBLIC_INTERFACE
def generate_openapi(out_path: str = DEFAULT_OUTPUT) -> str:
    """Write the OpenAPI schema to out_path, creating directories as needed, and return the path."""
    schema = app.openapi()
    _ensure_tags(schema)

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    return out_path


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    out_path = generate_openapi(args[0] if args else DEFAULT_OUTPUT)
    print(f"Wrote OpenAPI schema to: {out_path}")


if __name__ == "__main__":
    main()
