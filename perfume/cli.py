"""Command-line interface for Perfume."""

import argparse
import json
import sys
from glob import glob
from pathlib import Path
from typing import Optional

from rich.markup import escape

from .cli_builder import build_arg_parser
from .codegen import CodegenError, PopulationSize, ingredients
from .definitions.loader import MEMORY_STORE, build_bridge, load_population
from .definitions.models import ParsedDocument, PopulationDefinition
from .formatters import OutputFormatter
from .identity.allocation_logger import AllocationLogger
from .identity.allocation_logger_raw import AllocationLoggerRaw
from .identity.errors import ConfigurationError, PopulationExhausted, StorageFailure
from .identity.storage import RemoteStore
from .parser.markdown_parser import DefinitionError, MarkdownParser
from .utils.hex_string import InvalidEncoding
from .utils.project_root import find_project_root

BUILD_OPTIONS = ("size", "prefixes", "colors", "animals", "out")


class CLI:
    """Command-line interface for Perfume."""

    def __init__(self, output: Optional[OutputFormatter] = None):
        self.parser = build_arg_parser()
        self._output = output

    def run(self, argv: Optional[list[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:])

        Returns:
            Exit code
        """
        args = self.parser.parse_args(argv)
        output = self._output or OutputFormatter(no_color=args.no_color)

        try:
            if args.build_ingredients:
                return self._build_ingredients(args, output)

            project_root = (
                Path(args.project_root).resolve() if args.project_root else find_project_root()
            )
            markdown_files = self._discover_markdown_files(args.defs, project_root)
            if not markdown_files:
                output.print_error("Error", f"No definition files found for pattern: {args.defs}")
                return 1

            document = MarkdownParser().parse_files(markdown_files)

            if args.list_populations:
                self._list_populations(document, output)
                return 0

            if not args.identifiers:
                self.parser.print_usage()
                output.print_error("Error", "No identifiers specified")
                return 1

            definition = self._select_population(document, args.population)
            return self._name_identifiers(args, definition, project_root, output)

        except InvalidEncoding as e:
            output.print_error("Encoding error", str(e))
            return 1
        except StorageFailure as e:
            output.print_error("Storage error", str(e))
            return 1
        except PopulationExhausted as e:
            output.print_error("Population exhausted", str(e))
            return 1
        except CodegenError as e:
            output.print_error("Build error", str(e))
            return 1
        except ConfigurationError as e:
            output.print_error("Configuration error", str(e))
            return 1
        except DefinitionError as e:
            output.print_error("Definition error", str(e))
            return 1
        except ValueError as e:
            output.print_error("Error", str(e))
            return 1
        except Exception as e:
            output.print_error("Error", str(e))
            import traceback

            traceback.print_exc()
            return 1

    def _discover_markdown_files(self, defs_pattern: str, project_root: Path) -> list[Path]:
        pattern = Path(defs_pattern)
        if not pattern.is_absolute():
            pattern = project_root / defs_pattern
        return sorted(Path(path) for path in glob(str(pattern), recursive=True))

    def _select_population(
        self, document: ParsedDocument, name: Optional[str]
    ) -> PopulationDefinition:
        if name:
            return document.get_population(name)
        if len(document.populations) == 1:
            return next(iter(document.populations.values()))
        available = ", ".join(sorted(document.populations)) or "none"
        raise ValueError(f"Use --population to choose one of: {available}")

    def _name_identifiers(
        self,
        args: argparse.Namespace,
        definition: PopulationDefinition,
        project_root: Path,
        output: OutputFormatter,
    ) -> int:
        store_value = args.store or definition.store
        if not store_value:
            raise ConfigurationError(
                f"{definition.location}: population '{definition.name}' has no store "
                f"(set `store` or pass --store)"
            )

        if store_value.strip() == MEMORY_STORE and not args.json_output:
            output.print_warning("Using the memory: store; allocated offsets are lost on exit")

        population = load_population(definition, project_root)
        logger: Optional[AllocationLogger] = AllocationLoggerRaw(output) if args.verbose else None
        store = RemoteStore(build_bridge(store_value, project_root), logger=logger)

        identities = [
            (identifier, population.identity(identifier, store)) for identifier in args.identifiers
        ]

        if args.json_output:
            payload = {
                identifier: {
                    "friendly_name": identity.friendly_name,
                    "key": identity.storage.key.value,
                    "digest": identity.storage.digest.value,
                }
                for identifier, identity in identities
            }
            output.print_raw(json.dumps(payload, indent=2))
            return 0

        for identifier, identity in identities:
            output.print(output.identity.format_line(identifier, identity, show_storage=args.verbose))
        return 0

    def _list_populations(self, document: ParsedDocument, output: OutputFormatter) -> None:
        sym = output.symbols
        output.print(f"{sym.Book} [bold]Populations:[/bold]")
        for name in sorted(document.populations):
            definition = document.populations[name]
            store = escape(definition.store) if definition.store else "[dim]no store[/dim]"
            output.print(
                f"  [bold cyan]{name}[/bold cyan] [dim]ingredients:[/dim] {escape(definition.ingredients)} "
                f"[dim]store:[/dim] {store}"
            )

    def _build_ingredients(self, args: argparse.Namespace, output: OutputFormatter) -> int:
        missing = [f"--{option}" for option in BUILD_OPTIONS if not getattr(args, option)]
        if missing:
            output.print_error("Error", f"--build-ingredients requires {', '.join(missing)}")
            return 1

        table = ingredients(
            size=PopulationSize.from_string(args.size),
            prefixes=Path(args.prefixes),
            colors=Path(args.colors),
            animals=Path(args.animals),
            output=Path(args.out),
        )

        sym = output.symbols
        output.print(
            f"{sym.Save} [dim]Ingredients saved to:[/dim] [bold]{escape(args.out)}[/bold] "
            f"[dim]({table.capacity} identities, {table.offsets_per_key} per key)[/dim]"
        )
        return 0


def main() -> int:
    """Main entry point."""
    cli = CLI()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
