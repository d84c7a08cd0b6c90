"""Locates the target CRD among the loaded operator resources."""

import logging
from typing import Iterable

from kubepromise.core.errors import NotFoundError
from kubepromise.core.models import CRD_KIND, CustomResourceDefinition, Resource

logger = logging.getLogger("kubepromise.crd")


def resolve_crd(name: str, resources: Iterable[Resource]) -> CustomResourceDefinition:
    """
    Returns an owned copy of the first CRD named `name`.

    Resources are scanned in load order and the first match wins; duplicate
    names are logged but not rejected. The returned object shares no state
    with the loaded resource, so it can be rewritten freely.

    Raises:
        NotFoundError: if no CustomResourceDefinition carries that name.
    """
    match = None
    for resource in resources:
        if resource.kind != CRD_KIND or resource.name != name:
            continue
        if match is None:
            match = resource
        else:
            logger.warning(f"Duplicate CRD '{name}' in {resource.source}; using the one from {match.source}")

    if match is None:
        raise NotFoundError(name)

    logger.info(f"Resolved CRD {name} from {match.source}")
    return CustomResourceDefinition(body=match.copy().body, source=match.source)
