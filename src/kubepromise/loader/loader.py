#!/usr/bin/env python3
"""
KUBEPROMISE LOADER - The Collector
----------------------------------
Reads a directory of operator installation manifests into a ResourceSet.

Discovery follows the same safety rules as the rest of the tool: recursive,
deterministic (sorted) order, regular files only, symlinks skipped. Each
file may contain several YAML documents (or be plain JSON, which the YAML
1.2 parser reads natively). `kind: List` documents are flattened.

Author: KubePromise Team
Date: 2026-10-17
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List

from ruamel.yaml import YAML, YAMLError

from kubepromise.core.constants import MANIFEST_EXTENSIONS
from kubepromise.core.errors import ManifestError
from kubepromise.core.models import ResourceSet, resource_from_document
from kubepromise.validator.validator import KubeValidator

logger = logging.getLogger("kubepromise.loader")


class ManifestLoader:
    """
    Turns a manifest directory into the dependencies snapshot for one run.
    """

    def __init__(self, extensions: Iterable[str] = MANIFEST_EXTENSIONS):
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.validator = KubeValidator()
        # Round-trip mode keeps comments and key order for dependencies.yaml
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True

    def discover(self, directory: Path) -> List[Path]:
        """Lists manifest files under `directory` in sorted order."""
        return sorted(
            f for f in directory.rglob("*")
            if f.is_file() and not f.is_symlink() and f.suffix.lower() in self.extensions
        )

    def load(self, directory: str) -> ResourceSet:
        root = Path(directory)
        if not root.is_dir():
            raise ManifestError(f"operator manifests directory not found: {directory}", path=directory)

        resources = ResourceSet()
        files = self.discover(root)
        for file_path in files:
            rel_path = str(file_path.relative_to(root))
            for doc in self._read_documents(file_path, rel_path):
                resources.append(resource_from_document(doc, source=rel_path))

        logger.info(f"Loaded {len(resources)} resources from {len(files)} files in {root}")
        return resources

    def _read_documents(self, file_path: Path, rel_path: str) -> List[Any]:
        try:
            raw_text = file_path.read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError(f"failed to read {rel_path}: {e}", path=rel_path)

        try:
            raw_docs = list(self.yaml.load_all(raw_text))
        except YAMLError as e:
            raise ManifestError(f"failed to parse {rel_path}: {e}", path=rel_path)

        docs = []
        for idx, doc in enumerate(raw_docs):
            if doc is None:
                continue
            for item in self._flatten(doc):
                valid, msg = self.validator.validate_resource(item)
                if not valid:
                    raise ManifestError(f"{rel_path} (document {idx}): {msg}", path=rel_path)
                logger.debug(f"{rel_path}: found {item['kind']}/{item['metadata']['name']}")
                docs.append(item)
        return docs

    def _flatten(self, doc: Any) -> List[Any]:
        """Expands `kind: List` wrappers into their items."""
        if isinstance(doc, dict) and doc.get("kind") == "List" and "items" in doc:
            return list(doc.get("items") or [])
        return [doc]
