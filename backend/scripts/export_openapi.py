"""
Export the Employee Search OpenAPI schema to docs/api/.

Writes JSON and YAML versions of the schema generated by the FastAPI
application, so API consumers can browse the search endpoints offline.

Usage:
    python scripts/export_openapi.py
"""

import json
import sys
from pathlib import Path

import yaml

# Add backend directory to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))


def export_openapi() -> Path:
    """Export the OpenAPI schema and return the output directory."""
    # Importing the app registers every router
    from employee_search.main import app

    openapi_schema = app.openapi()

    docs_dir = backend_dir.parent / "docs" / "api"
    docs_dir.mkdir(parents=True, exist_ok=True)

    json_path = docs_dir / "openapi.json"
    yaml_path = docs_dir / "openapi.yaml"

    with open(json_path, "w") as f:
        json.dump(openapi_schema, f, indent=2)
    print(f"OpenAPI JSON exported to: {json_path}")

    with open(yaml_path, "w") as f:
        yaml.safe_dump(openapi_schema, f, default_flow_style=False, sort_keys=False)
    print(f"OpenAPI YAML exported to: {yaml_path}")

    employee_paths = [path for path in openapi_schema["paths"] if "/employees" in path]

    print("\nAPI Summary:")
    print(f"  Title: {openapi_schema['info']['title']}")
    print(f"  Version: {openapi_schema['info']['version']}")
    print(f"  Endpoints: {len(openapi_schema['paths'])} ({len(employee_paths)} employee search)")
    print(f"  Schemas: {len(openapi_schema.get('components', {}).get('schemas', {}))}")

    return docs_dir


if __name__ == "__main__":
    export_openapi()
