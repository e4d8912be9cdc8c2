"""Factory for constructing the CLI argument parser."""

import argparse

from .codegen import PopulationSize


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="perfume",
        description="Perfume - friendly names for identifiers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "identifiers",
        nargs="*",
        help="Identifiers to name",
    )

    parser.add_argument(
        "--defs",
        type=str,
        default=".perfume/defs/**/*.md",
        help="Glob pattern for markdown definition files (default: .perfume/defs/**/*.md)",
    )

    parser.add_argument(
        "--project-root",
        dest="project_root",
        type=str,
        help="Project root (default: nearest directory with .perfume or .git)",
    )

    parser.add_argument(
        "--population",
        type=str,
        help="Population to name identifiers in (optional when only one is defined)",
    )

    parser.add_argument(
        "--store",
        type=str,
        help="Override the population store: memory:, dir:<path> or an http(s) URL",
    )

    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print names and storage records as JSON",
    )

    parser.add_argument(
        "--list-populations",
        dest="list_populations",
        action="store_true",
        help="List all defined populations and exit",
    )

    parser.add_argument(
        "--verbose",
        dest="verbose",
        action="store_true",
        help="Report every ledger lookup and allocation",
    )

    parser.add_argument(
        "--no-color",
        dest="no_color",
        action="store_true",
        help="Disable colored output",
    )

    build = parser.add_argument_group("ingredients build")
    build.add_argument(
        "--build-ingredients",
        dest="build_ingredients",
        action="store_true",
        help="Compile word lists into an ingredients JSON file and exit",
    )
    build.add_argument(
        "--size",
        type=str,
        choices=[size.name.lower() for size in PopulationSize],
        help="Population size to provision for",
    )
    build.add_argument("--prefixes", type=str, help="Prefix word list (one word per line)")
    build.add_argument("--colors", type=str, help="Color word list (one word per line)")
    build.add_argument("--animals", type=str, help="Animal word list (one word per line)")
    build.add_argument("--out", type=str, help="Output ingredients JSON path")

    return parser
