"""Fixed names and defaults shared across KubePromise modules."""

import os

# Image of the step that turns Promise requests into operator resources
DEFAULT_PIPELINE_IMAGE = "ghcr.io/syntasso/kratix-cli/from-api-to-operator:v0.1.0"

PIPELINE_NAME = "instance-configure"
CONTAINER_NAME = "from-api-to-operator"

ENV_OPERATOR_GROUP = "OPERATOR_GROUP"
ENV_OPERATOR_VERSION = "OPERATOR_VERSION"
ENV_OPERATOR_KIND = "OPERATOR_KIND"

# Output layout
DEPENDENCIES_FILE = "dependencies.yaml"
API_FILE = "api.yaml"
WORKFLOW_FILE = "workflow.yaml"
WORKFLOW_DIR = os.path.join("workflows", "resource", "configure")

MANIFEST_EXTENSIONS = (".yaml", ".yml", ".json")

FILE_PERM = 0o644
