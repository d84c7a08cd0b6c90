#!/usr/bin/env python3
"""
KUBEPROMISE EXPORTER - High-Fidelity Round-Trip
-----------------------------------------------
Author: KubePromise Team
Date: 2026-10-17
"""

import io
from typing import Any, Optional

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from kubepromise.core.errors import SerializationError


class KubeExporter:
    """
    The Reconstructor: Converts resources (CommentedMaps or plain dicts)
    into YAML strings with Kubernetes-friendly key order.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True
        # Standard K8s: 2 spaces, but sequences are indented 4 (offset 2)
        # for maximum readability in IDEs.
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096
        self.preferred_order = ["apiVersion", "kind", "metadata", "spec", "data", "status"]

    def _get_sorted_map(self, data: Any, resource_level: bool = True) -> Any:
        """
        Recursively rebuilds data while maintaining comments and list stability.
        Identity keys are pulled forward on resource-level mappings only;
        nested mappings keep their original key order.
        Plain dicts are promoted to CommentedMap so their order is kept.
        """
        if isinstance(data, list):
            # Items of a top-level list (dependencies, workflows) are resources
            seq = CommentedSeq(self._get_sorted_map(item, resource_level) for item in data)
            if isinstance(data, CommentedSeq):
                seq.ca.comment = data.ca.comment
                seq.ca.items.update(data.ca.items)
            return seq
        if not isinstance(data, dict):
            return data

        sorted_map = CommentedMap()

        # 1. Preserve Header Comments
        if isinstance(data, CommentedMap) and data.ca.comment:
            sorted_map.ca.comment = data.ca.comment

        # 2. Key Sorting Logic
        keys = list(data.keys())

        def sort_logic(key):
            if resource_level and key in self.preferred_order:
                return self.preferred_order.index(key)
            # Unknown keys keep their relative original position
            return len(self.preferred_order) + keys.index(key)

        # 3. Recursive Rebuild
        for key in sorted(keys, key=sort_logic):
            sorted_map[key] = self._get_sorted_map(data[key], resource_level=False)

            # 4. Transfer Comment Metadata (EOL and Inline)
            if isinstance(data, CommentedMap) and key in data.ca.items:
                sorted_map.ca.items[key] = data.ca.items[key]

        return sorted_map

    def _dedent_top_level_sequence(self, text: str) -> str:
        """Pulls a top-level sequence back to column 0 ("- apiVersion: ...")."""
        return "\n".join(
            line[2:] if line.startswith("  ") else line for line in text.split("\n")
        )

    def export(self, data: Any, target: Optional[str] = None) -> str:
        """
        Serialises one YAML document. Lists (dependencies, workflows) are
        written as a single top-level sequence.
        """
        stream = io.StringIO()
        try:
            self.yaml.dump(self._get_sorted_map(data), stream)
        except YAMLError as e:
            raise SerializationError(f"failed to serialise {target or 'document'}: {e}", target=target)

        text = stream.getvalue()
        if isinstance(data, list):
            text = self._dedent_top_level_sequence(text)
        return text
