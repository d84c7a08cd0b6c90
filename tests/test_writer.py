"""Tests for YAML export and the output file tree writer."""

import pytest

from kubepromise.core.errors import SerializationError
from kubepromise.core.models import Directory, File
from kubepromise.output.exporter import KubeExporter
from kubepromise.output.writer import FileTreeWriter


@pytest.fixture
def tree():
    return Directory({
        "api.yaml": File({"spec": {"group": "promise.io"}, "kind": "CustomResourceDefinition", "apiVersion": "v1"}),
        "workflows": Directory({
            "resource": Directory({
                "configure": Directory({
                    "workflow.yaml": File([{"kind": "Pipeline", "metadata": {"name": "instance-configure"}}]),
                }),
            }),
        }),
    })


def test_exporter_puts_identity_keys_first():
    text = KubeExporter().export({"spec": {"b": 1, "a": 2}, "metadata": {"name": "x"}, "kind": "K", "apiVersion": "v1"})

    assert text.splitlines() == [
        "apiVersion: v1",
        "kind: K",
        "metadata:",
        "  name: x",
        "spec:",
        "  b: 1",
        "  a: 2",
    ]


def test_exporter_writes_lists_as_one_sequence(safe_yaml):
    text = KubeExporter().export([{"kind": "A"}, {"kind": "B"}])

    assert "---" not in text
    assert safe_yaml.load(text) == [{"kind": "A"}, {"kind": "B"}]


def test_exporter_reorders_only_resource_level_keys():
    names = {"plural": "widgets", "singular": "widget", "kind": "Widget"}
    properties = {"spec": {"type": "object"}, "status": {"type": "object"}, "kind": {"type": "string"}}
    doc = {"spec": {"names": names, "properties": properties}, "kind": "K", "apiVersion": "v1"}

    text = KubeExporter().export([doc])

    assert text.splitlines() == [
        "- apiVersion: v1",
        "  kind: K",
        "  spec:",
        "    names:",
        "      plural: widgets",
        "      singular: widget",
        "      kind: Widget",
        "    properties:",
        "      spec:",
        "        type: object",
        "      status:",
        "        type: object",
        "      kind:",
        "        type: string",
    ]


def test_exporter_wraps_representer_errors():
    with pytest.raises(SerializationError) as exc:
        KubeExporter().export({"kind": object()}, target="api.yaml")

    assert exc.value.target == "api.yaml"


def test_write_creates_nested_directories(tmp_path, tree, safe_yaml):
    written = FileTreeWriter().write(tree, str(tmp_path / "out"))

    workflow = tmp_path / "out" / "workflows" / "resource" / "configure" / "workflow.yaml"
    assert workflow.exists()
    assert (tmp_path / "out" / "api.yaml").exists()
    assert len(written) == 2
    assert safe_yaml.load(workflow.read_text()) == [{"kind": "Pipeline", "metadata": {"name": "instance-configure"}}]


def test_write_leaves_no_temp_files(tmp_path, tree):
    FileTreeWriter().write(tree, str(tmp_path))

    assert list(tmp_path.rglob("*.kubepromise.tmp")) == []


def test_write_overwrites_existing_files(tmp_path, tree, safe_yaml):
    (tmp_path / "api.yaml").write_text("stale: true\n")

    FileTreeWriter().write(tree, str(tmp_path))

    assert safe_yaml.load((tmp_path / "api.yaml").read_text())["spec"] == {"group": "promise.io"}


def test_render_matches_written_content(tmp_path, tree):
    writer = FileTreeWriter()
    rendered = writer.render(tree)
    writer.write(tree, str(tmp_path))

    assert list(rendered) == ["api.yaml", "workflows/resource/configure/workflow.yaml"]
    for rel_path, content in rendered.items():
        assert (tmp_path / rel_path).read_text() == content


def test_unknown_node_type_rejected(tmp_path):
    with pytest.raises(TypeError):
        FileTreeWriter().write(Directory({"bad.yaml": "not a node"}), str(tmp_path))
