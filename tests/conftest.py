"""Shared fixtures: sample operator manifests and CRD builders."""

from pathlib import Path

import pytest
from ruamel.yaml import YAML

from kubepromise.core.models import CustomResourceDefinition, resource_from_document

WIDGET_CRD_YAML = """\
# Widget operator API
apiVersion: apiextensions.k8s.io/v1
kind: CustomResourceDefinition
metadata:
  name: widgets.acme.io
spec:
  group: acme.io
  names:
    plural: widgets
    singular: widget
    kind: Widget
  scope: Namespaced
  versions:
    - name: v1
      served: true
      storage: true
      schema:
        openAPIV3Schema:
          type: object
          properties:
            spec:
              type: object
              properties:
                size:
                  type: integer
"""

GADGET_CRD_YAML = """\
apiVersion: apiextensions.k8s.io/v1
kind: CustomResourceDefinition
metadata:
  name: gadgets.acme.io
spec:
  group: acme.io
  names:
    plural: gadgets
    singular: gadget
    kind: Gadget
  scope: Namespaced
  versions:
    - name: v1alpha1
      served: true
      storage: false
      schema:
        openAPIV3Schema:
          type: object
          properties:
            spec:
              type: object
    - name: v1beta1
      served: true
      storage: true
      schema:
        openAPIV3Schema:
          type: object
          properties:
            spec:
              type: object
              properties:
                color:
                  type: string
    - name: v1
      served: false
      storage: false
      schema:
        openAPIV3Schema:
          type: object
"""

OPERATOR_DEPLOYMENT_YAML = """\
apiVersion: v1
kind: Namespace
metadata:
  name: acme-system
---
apiVersion: apps/v1
kind: Deployment
metadata:
  name: acme-operator
  namespace: acme-system
spec:
  replicas: 1
  selector:
    matchLabels:
      app: acme-operator
  template:
    metadata:
      labels:
        app: acme-operator
    spec:
      containers:
        - name: manager
          image: acme/operator:1.0.0
"""


def load_document(text: str):
    return YAML(typ='rt').load(text)


@pytest.fixture
def widget_crd() -> CustomResourceDefinition:
    return resource_from_document(load_document(WIDGET_CRD_YAML), source="crds.yaml")


@pytest.fixture
def gadget_crd() -> CustomResourceDefinition:
    return resource_from_document(load_document(GADGET_CRD_YAML), source="crds.yaml")


@pytest.fixture
def operator_dir(tmp_path) -> Path:
    """A manifest directory holding two CRDs and the operator workload."""
    root = tmp_path / "operator"
    (root / "crds").mkdir(parents=True)
    (root / "crds" / "widgets.yaml").write_text(WIDGET_CRD_YAML)
    (root / "crds" / "gadgets.yml").write_text(GADGET_CRD_YAML)
    (root / "operator.yaml").write_text(OPERATOR_DEPLOYMENT_YAML)
    return root


@pytest.fixture
def output_dir(tmp_path) -> Path:
    return tmp_path / "promise"


@pytest.fixture
def safe_yaml():
    return YAML(typ='safe')
