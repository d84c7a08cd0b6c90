"""Picks the canonical (storage) version of a CRD."""

import logging

from kubepromise.core.errors import InvalidCRDError
from kubepromise.core.models import CustomResourceDefinition

logger = logging.getLogger("kubepromise.crd")


def select_storage_version(crd: CustomResourceDefinition) -> int:
    """
    Index of the first version marked `storage: true`.
    Falls back to the first version when none is marked.
    """
    versions = crd.versions
    if not versions:
        raise InvalidCRDError(f"no versions found in CRD {crd.name}")

    for idx, version in enumerate(versions):
        if version.get("storage") is True:
            return idx

    logger.warning(f"CRD {crd.name} marks no storage version; using '{versions[0].get('name')}'")
    return 0
