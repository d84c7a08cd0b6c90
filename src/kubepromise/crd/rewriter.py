"""
Rewrites an operator CRD so it is served under a new API identity.

The rewrite keeps the stored version's schema, renames the group, kind and
plural, collapses the version list to the stored version, and pins the
`kind` and `apiVersion` schema properties to the new identity.
"""

import logging
from typing import Any, Optional

from ruamel.yaml.comments import CommentedMap

from kubepromise.core.errors import InvalidCRDError
from kubepromise.core.models import CRDNames, CustomResourceDefinition

logger = logging.getLogger("kubepromise.crd")


def rewrite_crd(crd: CustomResourceDefinition, stored_idx: int, group: str,
                names: CRDNames, version: Optional[str] = None) -> CustomResourceDefinition:
    """
    Mutates `crd` in place and returns it.

    Args:
        crd: An owned CRD, usually the copy handed out by `resolve_crd`.
        stored_idx: Index of the version to keep (see `select_storage_version`).
        group: The new API group.
        names: The new plural/singular/kind.
        version: New version name; empty keeps the stored version's name.
    """
    versions = crd.versions
    # Checked before touching anything so a bad index leaves crd intact
    if not 0 <= stored_idx < len(versions):
        raise InvalidCRDError(
            f"stored version index {stored_idx} out of range for CRD {crd.name} "
            f"with {len(versions)} versions"
        )

    crd.names = names
    crd.name = f"{names.plural}.{group}"
    crd.group = group

    stored_version = versions[stored_idx]
    if not version:
        version = stored_version.get("name")

    stored_version["name"] = version
    stored_version["served"] = True
    stored_version["storage"] = True

    properties = _schema_properties(stored_version)
    properties["kind"] = _single_value_enum(names.kind)
    properties["apiVersion"] = _single_value_enum(f"{group}/{version}")

    crd.versions = [stored_version]

    logger.info(f"Rewrote CRD as {crd.name} ({group}/{version}, Kind={names.kind})")
    return crd


def _single_value_enum(value: str) -> CommentedMap:
    return CommentedMap([("type", "string"), ("enum", [value])])


def _schema_properties(version: Any) -> Any:
    """Returns schema.openAPIV3Schema.properties, creating missing levels."""
    if version.get("schema") is None:
        version["schema"] = CommentedMap()
    schema = version["schema"]

    if schema.get("openAPIV3Schema") is None:
        schema["openAPIV3Schema"] = CommentedMap([("type", "object")])
    openapi = schema["openAPIV3Schema"]

    if openapi.get("properties") is None:
        openapi["properties"] = CommentedMap()
    return openapi["properties"]
