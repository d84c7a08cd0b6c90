#!/usr/bin/env python3
"""
KUBEPROMISE WRITER - File Tree Persistence
------------------------------------------
Walks an output tree of File/Directory nodes, serialises every File with
the KubeExporter and writes it atomically under the output directory.

Author: KubePromise Team
Date: 2026-10-17
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from kubepromise.core.constants import FILE_PERM
from kubepromise.core.models import Directory, File, Node
from kubepromise.output.exporter import KubeExporter

logger = logging.getLogger("kubepromise.writer")


class FileTreeWriter:
    """
    Persists the Promise files. Nothing is rolled back if a later write
    fails; re-running with the same inputs overwrites the same files.
    """

    def __init__(self, exporter: Optional[KubeExporter] = None, file_perm: int = FILE_PERM):
        self.exporter = exporter or KubeExporter()
        self.file_perm = file_perm

    def render(self, tree: Directory) -> Dict[str, str]:
        """
        Serialises the tree without touching the disk.
        Returns relative path -> YAML text, in tree order.
        """
        rendered: Dict[str, str] = {}
        self._render_node(tree, Path(), rendered)
        return rendered

    def _render_node(self, node: Node, rel_path: Path, rendered: Dict[str, str]):
        if isinstance(node, Directory):
            for name, child in node.entries.items():
                self._render_node(child, rel_path / name, rendered)
        elif isinstance(node, File):
            rendered[str(rel_path)] = self.exporter.export(node.content, target=str(rel_path))
        else:
            raise TypeError(f"unsupported output node at {rel_path}: {type(node).__name__}")

    def write(self, tree: Directory, output_dir: str) -> List[Path]:
        """Writes every file of the tree, creating directories as needed."""
        root = Path(output_dir)
        written: List[Path] = []
        self._write_node(tree, root, written)
        logger.info(f"Wrote {len(written)} files under {root}")
        return written

    def _write_node(self, node: Node, path: Path, written: List[Path]):
        if isinstance(node, Directory):
            path.mkdir(parents=True, exist_ok=True)
            for name, child in node.entries.items():
                self._write_node(child, path / name, written)
        elif isinstance(node, File):
            content = self.exporter.export(node.content, target=path.name)
            self._atomic_write(path, content)
            logger.debug(f"Wrote {path}")
            written.append(path)
        else:
            raise TypeError(f"unsupported output node at {path}: {type(node).__name__}")

    def _atomic_write(self, target_path: Path, content: str):
        if not os.access(target_path.parent, os.W_OK):
            raise PermissionError(f"No write access to {target_path.parent}")
        temp_file = target_path.with_suffix('.kubepromise.tmp')
        try:
            temp_file.write_text(content, encoding='utf-8')
            os.chmod(temp_file, self.file_perm)
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise IOError(f"Atomic write failed for {target_path}: {e}")
