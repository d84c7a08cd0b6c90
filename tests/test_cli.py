"""Tests for the kubepromise command line."""

import pytest

from kubepromise.cli.main import KubePromiseCLI


def operator_promise_args(operator_dir, output_dir, *extra):
    return [
        "init", "operator-promise", "widget",
        "-m", str(operator_dir),
        "-a", "widgets.acme.io",
        "-g", "promise.io",
        "-k", "Widget",
        "-d", str(output_dir),
        *extra,
    ]


def test_generates_promise_files(operator_dir, output_dir, capsys):
    code = KubePromiseCLI().run(operator_promise_args(operator_dir, output_dir, "-v", "v2"))

    assert code == 0
    assert (output_dir / "api.yaml").exists()
    assert (output_dir / "dependencies.yaml").exists()
    assert (output_dir / "workflows" / "resource" / "configure" / "workflow.yaml").exists()
    assert "widgets.promise.io" in capsys.readouterr().out


def test_dry_run_prints_preview(operator_dir, output_dir, capsys):
    code = KubePromiseCLI().run(operator_promise_args(operator_dir, output_dir, "--dry-run"))

    assert code == 0
    assert not output_dir.exists()
    assert "Dry Run Mode" in capsys.readouterr().out


def test_missing_crd_exits_non_zero(operator_dir, output_dir, capsys):
    args = operator_promise_args(operator_dir, output_dir)
    args[args.index("widgets.acme.io")] = "sprockets.acme.io"

    code = KubePromiseCLI().run(args)

    assert code == 1
    assert "no CRD found matching name: sprockets.acme.io" in capsys.readouterr().out


def test_missing_required_flag(operator_dir, output_dir):
    args = operator_promise_args(operator_dir, output_dir)
    args.remove("-k")
    args.remove("Widget")

    with pytest.raises(SystemExit) as exc:
        KubePromiseCLI().run(args)

    assert exc.value.code == 2


def test_no_arguments_prints_help(capsys):
    assert KubePromiseCLI().run([]) == 0
    assert "operator" in capsys.readouterr().out.lower()
