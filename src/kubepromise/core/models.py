#!/usr/bin/env python3
"""
KUBEPROMISE CORE MODELS
-----------------------
Defines the fundamental data structures used across the KubePromise engine:
loaded Kubernetes resources, the CRD specialisation the rewriter works on,
the Pipeline descriptor, and the output file tree.

Loaded manifests have no fixed shape until matched by kind, so resources are
a small tagged union: `CustomResourceDefinition` for CRDs and
`GenericResource` (opaque payload) for everything else.

Author: KubePromise Team
Date: 2026-10-17
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, Union

from ruamel.yaml.comments import CommentedMap

CRD_KIND = "CustomResourceDefinition"


@dataclass
class Resource:
    """
    A single Kubernetes document as loaded from disk.

    The body is kept as the ruamel round-trip mapping so that comments and
    key order of the operator's manifests survive re-serialisation.
    """
    body: Any                      # CommentedMap (or plain dict) payload
    source: Optional[str] = None   # Relative path of the file it came from

    @property
    def kind(self) -> str:
        return self.body.get("kind", "")

    @property
    def api_version(self) -> str:
        return self.body.get("apiVersion", "")

    @property
    def name(self) -> str:
        return (self.body.get("metadata") or {}).get("name", "")

    @name.setter
    def name(self, value: str):
        if self.body.get("metadata") is None:
            self.body["metadata"] = CommentedMap()
        self.body["metadata"]["name"] = value

    @property
    def identity(self) -> Tuple[str, str]:
        return self.kind, self.name

    def copy(self) -> "Resource":
        """Returns an independently mutable deep copy of this resource."""
        return type(self)(body=copy.deepcopy(self.body), source=self.source)


@dataclass
class GenericResource(Resource):
    """Fallback variant for every kind the engine does not inspect."""


@dataclass
class CRDNames:
    """The `spec.names` block of a CRD."""
    plural: str
    singular: str
    kind: str

    @classmethod
    def for_kind(cls, kind: str, plural: Optional[str] = None) -> "CRDNames":
        """
        Derives consistent names from a Kind. The plural defaults to the
        lowercased kind with an 's' suffix.
        """
        lowered = kind.lower()
        return cls(plural=plural or f"{lowered}s", singular=lowered, kind=kind)

    def to_dict(self) -> Dict[str, str]:
        return {"plural": self.plural, "singular": self.singular, "kind": self.kind}


@dataclass
class CustomResourceDefinition(Resource):
    """
    Typed view over an apiextensions.k8s.io CRD document.
    Version entries stay as mappings: {name, served, storage, schema, ...}.
    """

    @property
    def spec(self) -> Any:
        if self.body.get("spec") is None:
            self.body["spec"] = CommentedMap()
        return self.body["spec"]

    @property
    def group(self) -> str:
        return self.spec.get("group", "")

    @group.setter
    def group(self, value: str):
        self.spec["group"] = value

    @property
    def names(self) -> CRDNames:
        raw = self.spec.get("names") or {}
        return CRDNames(
            plural=raw.get("plural", ""),
            singular=raw.get("singular", ""),
            kind=raw.get("kind", ""),
        )

    @names.setter
    def names(self, value: CRDNames):
        self.spec["names"] = CommentedMap(value.to_dict())

    @property
    def versions(self) -> List[Any]:
        return self.spec.get("versions") or []

    @versions.setter
    def versions(self, value: List[Any]):
        self.spec["versions"] = value


# Kind tag -> resource variant. Anything not listed is a GenericResource.
RESOURCE_KINDS: Dict[str, Type[Resource]] = {
    CRD_KIND: CustomResourceDefinition,
}


def resource_from_document(doc: Any, source: Optional[str] = None) -> Resource:
    """Wraps a parsed document in the variant matching its kind tag."""
    variant = RESOURCE_KINDS.get(doc.get("kind", ""), GenericResource)
    return variant(body=doc, source=source)


class ResourceSet:
    """
    The full loaded resource collection for one invocation.
    Treated as a snapshot; the only mutation is `replace`, which the engine
    uses to put the rewritten CRD back in its original slot.
    """

    def __init__(self, resources: Optional[List[Resource]] = None):
        self._resources: List[Resource] = list(resources or [])

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def __getitem__(self, idx: int) -> Resource:
        return self._resources[idx]

    def append(self, resource: Resource):
        self._resources.append(resource)

    def find(self, kind: str, name: str) -> Optional[int]:
        """Index of the first resource with the given identity, or None."""
        for idx, resource in enumerate(self._resources):
            if resource.identity == (kind, name):
                return idx
        return None

    def replace(self, kind: str, name: str, updated: Resource) -> bool:
        """
        Swaps the first resource identified by (kind, name) for `updated`.
        Returns False when nothing matched.
        """
        idx = self.find(kind, name)
        if idx is None:
            return False
        self._resources[idx] = updated
        return True

    def documents(self) -> List[Any]:
        return [r.body for r in self._resources]


@dataclass
class EnvVar:
    name: str
    value: str


@dataclass
class Container:
    name: str
    image: str
    env: List[EnvVar] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "image": self.image,
            "env": [{"name": e.name, "value": e.value} for e in self.env],
        }


@dataclass
class Pipeline:
    """A platform.kratix.io Pipeline resource with its container steps."""
    name: str
    containers: List[Container] = field(default_factory=list)
    api_version: str = "platform.kratix.io/v1alpha1"
    kind: str = "Pipeline"

    def to_document(self) -> Dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": {"name": self.name},
            "spec": {"containers": [c.to_dict() for c in self.containers]},
        }


@dataclass
class File:
    """Leaf of the output tree; content is serialised to YAML on write."""
    content: Any


@dataclass
class Directory:
    """Inner node of the output tree: entry name -> File or Directory."""
    entries: Dict[str, "Node"] = field(default_factory=dict)


Node = Union[File, Directory]
