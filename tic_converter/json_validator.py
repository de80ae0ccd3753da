from __future__ import annotations
from typing import Any, Dict, Tuple
from jsonschema import Draft202012Validator
from .layout import load_json_resource
from .types import ValidationResult, Finding

SCHEMA_FILE = "in_network_rates.schema.json"

def _load_schema() -> Tuple[dict, str]:
    """Load the bundled In-Network Rates schema and the version it describes."""
    schema = load_json_resource(SCHEMA_FILE)
    version = schema["properties"]["version"]["enum"][0]
    return schema, version

def _json_path(path) -> str:
    return "$" + "".join([f"[{i}]" if isinstance(i,int) else f".{i}" for i in path])

def validate_document(data: Dict[str, Any]) -> ValidationResult:
    """Validate an assembled document (as plain dicts/lists) against the bundled schema."""
    schema, v = _load_schema()
    vr = ValidationResult(ok=True, schema_version=v)
    vr.summary = {
        "in_network": len(data.get("in_network", [])) if isinstance(data, dict) else 0,
    }

    validator = Draft202012Validator(schema)
    for err in sorted(validator.iter_errors(data), key=lambda e: list(map(str, e.path))):
        exp = str(err.schema.get("enum", err.schema.get("type",""))) if isinstance(err.schema, dict) else ""
        vr.findings.append(Finding(
            severity="error",
            rule="jsonschema",
            message=err.message,
            field=_json_path(err.path),
            expected=exp or None,
            actual=None if isinstance(err.instance, (dict, list)) else repr(err.instance),
        ))

    if vr.findings:
        vr.ok = False
    return vr
