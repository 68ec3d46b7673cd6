"""Structured edits of a project's package.json manifest."""

import json
import logging

from jsonpath_ng import Child, Fields, Root
from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JSONPathError

from dev_studio_mcp.errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_PATH = "package.json"
DEPENDENCIES_KEY = "dependencies"


def load_manifest(content: str | None) -> dict:
    """Parse manifest text. Missing or blank content is an empty manifest."""
    if content is None or not content.strip():
        return {}
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {MANIFEST_PATH}: {str(e)}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"{MANIFEST_PATH} must contain a JSON object.")
    return data


def dump_manifest(data: dict) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _dependency_path(name: str) -> Child:
    # Built from nodes rather than parsed so scoped names like "@types/node" need no quoting.
    return Child(Child(Root(), Fields(DEPENDENCIES_KEY)), Fields(name))


def set_dependency(data: dict, name: str, version: str) -> dict:
    """Add or overwrite `dependencies[name]` in a parsed manifest."""
    if not isinstance(data.get(DEPENDENCIES_KEY), dict):
        data[DEPENDENCIES_KEY] = {}

    jsonpath_expr = _dependency_path(name)
    parent_matches = jsonpath_expr.left.find(data)
    if not parent_matches:
        raise ManifestError(f"Parent path not found: {jsonpath_expr.left}")

    for match in parent_matches:
        match.value[jsonpath_expr.right.fields[0]] = version
    logger.debug(f"Set dependency {name}={version}")
    return data


def list_dependencies(data: dict) -> list[tuple[str, str]]:
    """Return the (name, version) pairs of the manifest's dependencies object."""
    if not isinstance(data.get(DEPENDENCIES_KEY), dict):
        return []
    try:
        matches = jsonpath_parse(f"$.{DEPENDENCIES_KEY}.*").find(data)
    except JSONPathError as e:
        raise ManifestError(f"Error reading dependencies: {str(e)}") from e
    return [(match.path.fields[0], str(match.value)) for match in matches]
