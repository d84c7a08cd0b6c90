"""Builds the resource configure pipeline shipped with the Promise."""

from typing import List

from kubepromise.core.constants import (
    CONTAINER_NAME,
    DEFAULT_PIPELINE_IMAGE,
    ENV_OPERATOR_GROUP,
    ENV_OPERATOR_KIND,
    ENV_OPERATOR_VERSION,
    PIPELINE_NAME,
)
from kubepromise.core.models import Container, EnvVar, Pipeline


def build_resource_configure_pipeline(group: str, version: str, kind: str,
                                      image: str = DEFAULT_PIPELINE_IMAGE) -> Pipeline:
    """
    Pipeline whose single step converts a Promise request into the
    operator's own resource. It is parameterised with the operator's
    original group/version/kind, never the Promise API's.
    """
    container = Container(
        name=CONTAINER_NAME,
        image=image,
        env=[
            EnvVar(name=ENV_OPERATOR_GROUP, value=group),
            EnvVar(name=ENV_OPERATOR_VERSION, value=version),
            EnvVar(name=ENV_OPERATOR_KIND, value=kind),
        ],
    )
    return Pipeline(name=PIPELINE_NAME, containers=[container])


def resource_configure_workflow(group: str, version: str, kind: str,
                                image: str = DEFAULT_PIPELINE_IMAGE) -> List[dict]:
    """The content of workflow.yaml: a list holding the one pipeline."""
    return [build_resource_configure_pipeline(group, version, kind, image).to_document()]
