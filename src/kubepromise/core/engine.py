#!/usr/bin/env python3
"""
KUBEPROMISE ENGINE - The High Orchestrator
------------------------------------------
The PromiseEngine turns an operator's installation manifests into the
files of a Promise:

1. Load the manifests (dependencies snapshot)
2. Resolve the target CRD (owned copy)
3. Select its storage version
4. Rewrite it under the new API identity and self-check the result
5. Build the resource configure pipeline from the operator's coordinates
6. Write (or render, for dry runs) the output tree

Author: KubePromise Team
Date: 2026-10-17
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from kubepromise.core.constants import (
    API_FILE,
    DEFAULT_PIPELINE_IMAGE,
    DEPENDENCIES_FILE,
    MANIFEST_EXTENSIONS,
    WORKFLOW_DIR,
    WORKFLOW_FILE,
)
from kubepromise.core.errors import InvalidCRDError, KubePromiseError
from kubepromise.core.models import (
    CRD_KIND,
    CRDNames,
    CustomResourceDefinition,
    Directory,
    File,
    ResourceSet,
)
from kubepromise.crd.resolver import resolve_crd
from kubepromise.crd.rewriter import rewrite_crd
from kubepromise.crd.selector import select_storage_version
from kubepromise.loader.loader import ManifestLoader
from kubepromise.output.writer import FileTreeWriter
from kubepromise.validator.validator import KubeValidator
from kubepromise.workflows.pipeline import resource_configure_workflow

# Setup standardized logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("kubepromise.engine")


class PromiseEngine:
    """
    Principal orchestrator for operator Promise generation.
    One call to `generate` is one invocation: no state carries over.
    """

    def __init__(self, output_dir: str = ".", pipeline_image: str = DEFAULT_PIPELINE_IMAGE,
                 extensions: Iterable[str] = MANIFEST_EXTENSIONS):
        self.output_dir = Path(output_dir)
        self.pipeline_image = pipeline_image

        self.loader = ManifestLoader(extensions)
        self.validator = KubeValidator()
        self.writer = FileTreeWriter()

    def generate(self, manifests_dir: str, crd_name: str, group: str, kind: str,
                 version: Optional[str] = None, plural: Optional[str] = None,
                 dry_run: bool = False) -> Dict[str, Any]:
        """
        Runs the full derivation and returns a report of what was produced.

        Raises:
            ManifestError, NotFoundError, InvalidCRDError, SerializationError,
            or IOError; all terminal.
        """
        if not group or not kind:
            raise KubePromiseError("group and kind must not be empty")

        names = CRDNames.for_kind(kind, plural)

        # Phase 1: Load
        dependencies = self.loader.load(manifests_dir)

        # Phase 2: Resolve & select
        crd = resolve_crd(crd_name, dependencies)
        stored_idx = select_storage_version(crd)

        operator = {
            "group": crd.group,
            "version": crd.versions[stored_idx].get("name"),
            "kind": crd.names.kind,
        }
        logger.info(f"Operator API: {operator['group']}/{operator['version']}, Kind={operator['kind']}")

        # Phase 3: Rewrite & self-check
        rewrite_crd(crd, stored_idx, group, names, version)
        valid, err = self.validator.validate_rewrite(crd)
        if not valid:
            raise InvalidCRDError(f"rewritten CRD {crd.name} is inconsistent: {err}")

        dependencies.replace(CRD_KIND, crd_name, crd)

        # Phase 4: Assemble & persist
        tree = self.build_tree(dependencies, crd, operator)
        result = {
            "crd_name": crd_name,
            "api_name": crd.name,
            "operator": operator,
            "api": {
                "group": group,
                "version": crd.versions[0].get("name"),
                "kind": names.kind,
                "plural": names.plural,
            },
            "resource_count": len(dependencies),
            "output_dir": str(self.output_dir),
            "dry_run": dry_run,
            "files": [],
            "rendered": {},
        }

        if dry_run:
            result["rendered"] = self.writer.render(tree)
            result["files"] = list(result["rendered"].keys())
        else:
            written = self.writer.write(tree, str(self.output_dir))
            result["files"] = [str(p.relative_to(self.output_dir)) for p in written]

        return result

    def build_tree(self, dependencies: ResourceSet, crd: CustomResourceDefinition,
                   operator: Dict[str, str]) -> Directory:
        """Lays out dependencies.yaml, api.yaml and the configure workflow."""
        workflow = File(resource_configure_workflow(
            operator["group"], operator["version"], operator["kind"], image=self.pipeline_image
        ))

        # workflows/resource/configure/workflow.yaml as nested directories
        node = Directory({WORKFLOW_FILE: workflow})
        parts = Path(WORKFLOW_DIR).parts
        for part in reversed(parts[1:]):
            node = Directory({part: node})

        return Directory({
            DEPENDENCIES_FILE: File(dependencies.documents()),
            API_FILE: File(crd.body),
            parts[0]: node,
        })
