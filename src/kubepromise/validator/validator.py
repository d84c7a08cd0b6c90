#!/usr/bin/env python3
"""
KUBEPROMISE VALIDATOR - The Judge
---------------------------------
Two gates guard the engine:

1. Load gate: every document read from the operator manifests must be a
   viable Kubernetes resource (apiVersion, kind, metadata.name).
2. Self-check: the rewritten CRD must be consistent with the identity it
   was given before the engine allows it to be written to disk.

Author: KubePromise Team
Date: 2026-10-17
"""

import logging
from typing import Any, Tuple

from kubepromise.core.models import CustomResourceDefinition

logger = logging.getLogger("kubepromise.validator")


class KubeValidator:
    """
    Structural checks on loaded documents and rewritten CRDs.
    Checks return (ok, message) pairs; callers decide how to fail.
    """

    def __init__(self):
        # Core fields that must exist in every single K8s resource
        self.required_fields = ["apiVersion", "kind", "metadata"]

    def validate_resource(self, doc: Any) -> Tuple[bool, str]:
        """Checks that a parsed document looks like a Kubernetes resource."""
        if not isinstance(doc, dict):
            return False, "Document is not a mapping."

        for field in self.required_fields:
            if not doc.get(field):
                return False, f"Missing required top-level field '{field}'."

        metadata = doc["metadata"]
        if not isinstance(metadata, dict) or not metadata.get("name"):
            return False, "Missing required field 'metadata.name'."

        return True, "Resource passes structural integrity check."

    def validate_rewrite(self, crd: CustomResourceDefinition) -> Tuple[bool, str]:
        """
        Verifies the invariants of a rewritten CRD: a single version that is
        both served and stored, a name matching plural.group, and kind and
        apiVersion enums matching the new identity.
        """
        names = crd.names
        expected_name = f"{names.plural}.{crd.group}"
        if crd.name != expected_name:
            return False, f"CRD name '{crd.name}' does not match '{expected_name}'."

        versions = crd.versions
        if len(versions) != 1:
            return False, f"Expected exactly one version, found {len(versions)}."

        version = versions[0]
        if version.get("served") is not True or version.get("storage") is not True:
            return False, f"Version '{version.get('name')}' must be both served and stored."

        properties = (
            (version.get("schema") or {}).get("openAPIV3Schema") or {}
        ).get("properties") or {}

        expected_enums = {
            "kind": names.kind,
            "apiVersion": f"{crd.group}/{version.get('name')}",
        }
        for prop, literal in expected_enums.items():
            enum = (properties.get(prop) or {}).get("enum")
            if enum is None or list(enum) != [literal]:
                return False, f"Schema property '{prop}' must be constrained to ['{literal}'], found {enum}."

        logger.debug(f"Rewritten CRD {crd.name} passed consistency check")
        return True, "Rewritten CRD is self-consistent."
