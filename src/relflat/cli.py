"""relflat CLI: flatten view documents and verify heading trees."""

import argparse
import csv
import io
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional


logger = logging.getLogger("relflat.cli")


def _add_option_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum relation nesting (default: 16)"
    )
    parser.add_argument(
        "--separator",
        default=None,
        help="Label path separator (default: '.')"
    )


def _build_options(args):
    from .kernel.options import FlattenOptions

    overrides = {}
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if getattr(args, "separator", None) is not None:
        overrides["separator"] = args.separator
    return FlattenOptions(**overrides)


def _render_csv(view) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(view.labels)
    for row in view.rows:
        writer.writerow(["" if value is None else value for value in row])
    return buf.getvalue()


def _configure_logging(args) -> None:
    level = logging.ERROR if args.quiet else getattr(logging, args.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr, force=True)


def main():
    """Main CLI entry point for relflat commands."""
    try:
        relflat_version = get_version("relflat")
    except PackageNotFoundError:
        relflat_version = "dev"

    parser = argparse.ArgumentParser(
        prog="relflat",
        description="relflat: flatten nested relation headings and rows for table views"
    )
    parser.add_argument("--version", action="version", version=f"relflat {relflat_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level for diagnostics on stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # flatten command
    flatten_parser = subparsers.add_parser(
        "flatten",
        help="Flatten a view document into a header and flat rows",
        parents=[parent_parser]
    )
    flatten_parser.add_argument(
        "document",
        type=Path,
        help="Path to view document (JSON)"
    )
    flatten_parser.add_argument(
        "--rows",
        type=Path,
        default=None,
        help="Path to a JSON list of rows (overrides rows in the document)"
    )
    flatten_parser.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        help="Output format"
    )
    flatten_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output file (defaults to stdout)"
    )
    _add_option_arguments(flatten_parser)

    # verify command
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify the heading tree of a view document",
        parents=[parent_parser]
    )
    verify_parser.add_argument(
        "document",
        type=Path,
        help="Path to view document (JSON)"
    )
    verify_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory for verify_headings.json"
    )
    _add_option_arguments(verify_parser)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args)

    if args.command == "flatten":
        try:
            from .api import build_table, load_rows, load_view
            from .kernel.errors import KernelValidationError
            from ._internal.canonical_json import canonical_dumps

            options = _build_options(args)
            document = load_view(Path(args.document).resolve())
            rows = load_rows(args.rows.resolve()) if args.rows else document.rows

            view = build_table(document.headings, rows, options)

            if args.format == "csv":
                content = _render_csv(view)
            else:
                payload = view.model_dump(mode="json")
                payload["table"] = document.table
                content = canonical_dumps(payload) + "\n"

            if args.out is not None:
                out_path = Path(args.out).resolve()
                out_path.parent.mkdir(parents=True, exist_ok=True)
                out_path.write_text(content, encoding="utf-8")
                if not args.quiet:
                    print("[OK] Flatten complete")
                    print(f"  Output: {out_path}")
                    print(f"  Columns: {len(view.columns)}")
                    print(f"  Rows: {len(view.rows)}")
            else:
                sys.stdout.write(content)
            sys.exit(0)
        except KernelValidationError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    elif args.command == "verify":
        try:
            from .api import load_view, validate_headings
            from ._internal.canonical_json import canonical_dumps

            options = _build_options(args)
            document = load_view(Path(args.document).resolve())
            result = validate_headings(document.headings, options)
            logger.debug("Verified %s: %d errors, %d warnings",
                         args.document, len(result.errors), len(result.warnings))

            output_dir: Optional[Path] = Path(args.output_dir).resolve() if args.output_dir else None
            if output_dir is not None:
                output_dir.mkdir(parents=True, exist_ok=True)
                report_out = output_dir / "verify_headings.json"
                report_out.write_text(canonical_dumps(result.model_dump()) + "\n", encoding="utf-8")
                if not args.quiet:
                    print("[OK] Verification complete")
                    print(f"  Report: {report_out}")
            elif not args.quiet:
                status = "OK" if result.ok else "FAILED"
                print(f"[{status}] Verification complete")
            if not args.quiet:
                print(f"  Status: {'OK' if result.ok else 'FAILED'}")
                print(f"  Errors: {len(result.errors)}")
                print(f"  Warnings: {len(result.warnings)}")
                for issue in result.errors + result.warnings:
                    print(f"  - {issue.code}: {issue.message}")
            if not result.ok:
                sys.exit(1)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
