#!/usr/bin/env python3
"""
KUBEPROMISE CLI
---------------
Command-line entry point. Translates `init operator-promise` invocations
into PromiseEngine runs and renders the outcome.

Author: KubePromise Team
Date: 2026-10-17
"""

import sys
import argparse
import logging

from kubepromise.cli.formatter import KubeFormatter, console
from kubepromise.core.engine import PromiseEngine
from kubepromise.core.errors import KubePromiseError

VERSION = "0.1.0"


class KubePromiseCLI:
    """
    CLI wrapper that translates user commands into Engine actions.
    """

    def __init__(self):
        """Initializes the CLI and sets up the argument parser."""
        self.formatter = KubeFormatter()
        self.parser = argparse.ArgumentParser(
            prog="kubepromise",
            description="KubePromise - Generate Promises from Kubernetes Operators",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Generate a Promise from the Postgres operator
  kubepromise init operator-promise postgres \\
      -m ./operator -a postgresqls.acid.zalan.do -g marketplace.kratix.io -k Postgres

  # Preview without writing
  kubepromise init operator-promise postgres -m ./operator -a postgresqls.acid.zalan.do \\
      -g marketplace.kratix.io -k Postgres --dry-run
"""
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-V", "--cli-version", action="version", version=f"kubepromise v{VERSION}")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        init_parser = subparsers.add_parser("init", help="Initialize a new Promise")
        init_sub = init_parser.add_subparsers(dest="init_command", metavar="Command")

        op_parser = init_sub.add_parser("operator-promise", help="Generate a Promise from a given Kubernetes Operator")
        op_parser.add_argument("name", help="Name of the Promise")
        op_parser.add_argument("-m", "--operator-manifests", required=True,
                               help="The path to the directory containing the operator manifests")
        op_parser.add_argument("-a", "--api-from", required=True,
                               help="The name of the CRD which the Promise API should be generated from")
        op_parser.add_argument("-g", "--group", required=True, help="The API group for the Promise")
        op_parser.add_argument("-k", "--kind", required=True, help="The kind to be provided by the Promise")
        op_parser.add_argument("-v", "--version", default="",
                               help="The API version for the Promise (default: the CRD's storage version)")
        op_parser.add_argument("-p", "--plural", default="",
                               help="The plural form of the kind (default: lowercase kind + 's')")
        op_parser.add_argument("-d", "--output-dir", default=".", help="The output directory to write the Promise structure to")
        op_parser.add_argument("--dry-run", action="store_true", help="Preview the generated files without writing")
        op_parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    def _run_operator_promise(self, args: argparse.Namespace) -> int:
        """Generates the Promise files and renders the report."""
        if args.verbose:
            logging.getLogger("kubepromise").setLevel(logging.DEBUG)

        engine = PromiseEngine(output_dir=args.output_dir)
        try:
            result = engine.generate(
                args.operator_manifests,
                args.api_from,
                group=args.group,
                kind=args.kind,
                version=args.version,
                plural=args.plural,
                dry_run=args.dry_run,
            )
        except (KubePromiseError, OSError) as e:
            self.formatter.print_error(str(e))
            return 1

        if args.dry_run:
            self.formatter.display_rendered(result["rendered"])
        self.formatter.print_final_table(result)
        self.formatter.print_summary(result)
        if not args.dry_run:
            console.print(f"\n[bold green]Promise '{args.name}' generated.[/bold green]")
        return 0

    def run(self, argv=None) -> int:
        """Primary routing entry point."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.formatter.print_header("Operator Promise Generator", VERSION)
            self.parser.print_help()
            return 0

        args = self.parser.parse_args(argv)
        if args.command == "init" and args.init_command == "operator-promise":
            self.formatter.print_header("Operator Promise", VERSION)
            return self._run_operator_promise(args)

        self.parser.print_help()
        return 1


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KubePromiseCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
