"""Exceptions raised by the KubePromise engine.

Every failure is terminal for the invocation; the CLI prints the message and
exits non-zero. Filesystem write failures surface as the built-in
``IOError``/``OSError`` raised by the writer.
"""

from typing import Optional


class KubePromiseError(Exception):
    """Base class for all KubePromise failures."""


class ManifestError(KubePromiseError):
    """Raised when an operator manifest cannot be read, parsed, or is not a
    Kubernetes resource (missing apiVersion, kind or metadata.name).

    Attributes:
        path: The manifest file the failure relates to (optional)
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(KubePromiseError):
    """Raised when the requested CRD is not among the loaded resources."""

    def __init__(self, name: str) -> None:
        super().__init__(f"no CRD found matching name: {name}")
        self.name = name


class InvalidCRDError(KubePromiseError):
    """Raised when a CRD is structurally unusable.

    Covers a CRD that declares no versions, a stored-version index outside
    the version list, and a rewritten CRD that fails its consistency check.
    """


class SerializationError(KubePromiseError):
    """Raised when a resource or schema cannot be marshalled to YAML.

    Attributes:
        target: The output entry being serialised (optional)
    """

    def __init__(self, message: str, target: Optional[str] = None) -> None:
        super().__init__(message)
        self.target = target
