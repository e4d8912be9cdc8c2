"""Markdown parser for population definitions."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import mistune

from ..definitions.models import ParsedDocument, PopulationDefinition, SourceLocation


class DefinitionError(ValueError):
    """Raised when a definition file is malformed."""


@dataclass
class Section:
    """Represents a level-1 section in the markdown document."""

    title: str
    content: list[str]
    line_number: int


class MarkdownParser:
    """Parser for markdown files containing population definitions.

    Example:
        # population: bt
        - `secret`: `env.PERFUME_BT_SECRET`
        - `ingredients`: `data/bhutan.json`
        - `store`: `dir:.perfume/store`
    """

    # Pattern to match population header: population: name
    POPULATION_HEADER_PATTERN = re.compile(r"^population:\s*([a-zA-Z0-9][a-zA-Z0-9_.-]*)$")

    # Pattern for property list items: `name`: `value`
    PROPERTY_PATTERN = re.compile(r"^\s*`([a-z][a-z0-9-]*)`\s*:\s*`([^`]*)`\s*$")

    # Pattern for level-1 headings in raw text, used for line numbers
    HEADING_LINE_PATTERN = re.compile(r"^#\s+(.*?)\s*#*\s*$")

    REQUIRED_PROPERTIES = ("secret", "ingredients")
    OPTIONAL_PROPERTIES = ("store",)

    def __init__(self):
        self.markdown_parser = mistune.create_markdown(renderer=None)

    def parse_files(self, file_paths: list[Path]) -> ParsedDocument:
        """Parse multiple markdown files into a single document.

        Raises:
            DefinitionError: If parsing fails or a population is defined twice
        """
        all_populations: dict[str, PopulationDefinition] = {}

        for file_path in file_paths:
            content = Path(file_path).read_text(encoding="utf-8")
            for name, population in self._parse_file(file_path, content).items():
                if name in all_populations:
                    existing = all_populations[name]
                    raise DefinitionError(
                        f"Duplicate population '{name}' found:\n"
                        f"  First: {existing.location}\n"
                        f"  Second: {population.location}"
                    )
                all_populations[name] = population

        return ParsedDocument(populations=all_populations)

    def _parse_file(self, file_path: Path, content: str) -> dict[str, PopulationDefinition]:
        populations = {}
        for section in self._extract_sections(content):
            match = self.POPULATION_HEADER_PATTERN.match(section.title.strip())
            if not match:
                continue
            name = match.group(1)
            if name in populations:
                raise DefinitionError(
                    f"{file_path}:{section.line_number}: population '{name}' is defined twice"
                )
            populations[name] = self._parse_population(section, name, file_path)
        return populations

    def _extract_sections(self, content: str) -> list[Section]:
        """Extract all level-1 sections from markdown content."""
        heading_lines = self._heading_line_numbers(content)
        tokens = self.markdown_parser(content)
        sections: list[Section] = []
        current: Optional[Section] = None

        for token in tokens:
            if token["type"] == "heading" and token["attrs"]["level"] == 1:
                title = self._extract_text_from_token(token)
                line_number = heading_lines.pop(0) if heading_lines else 0
                current = Section(title=title, content=[], line_number=line_number)
                sections.append(current)
            elif current is not None and token["type"] == "list":
                # prose paragraphs are free-form; only list items carry properties
                current.content.extend(self._extract_list_items(token))

        return sections

    def _heading_line_numbers(self, content: str) -> list[int]:
        """Line numbers of '# ' headings outside fenced code blocks."""
        numbers = []
        in_code_block = False
        for line_num, line in enumerate(content.split("\n"), start=1):
            if line.strip().startswith("```"):
                in_code_block = not in_code_block
                continue
            if not in_code_block and self.HEADING_LINE_PATTERN.match(line):
                numbers.append(line_num)
        return numbers

    def _extract_text_from_token(self, token: dict) -> str:
        """Extract text content from a token."""
        if "children" in token:
            texts = []
            for child in token["children"]:
                if child["type"] == "text":
                    texts.append(child["raw"])
                elif child["type"] == "codespan":
                    texts.append(f"`{child['raw']}`")
                elif child["type"] in ("block_text", "paragraph"):
                    texts.append(self._extract_text_from_token(child))
            return "".join(texts)
        return token.get("raw", "")

    def _extract_list_items(self, list_token: dict) -> list[str]:
        """Extract list items as strings."""
        items = []
        for item in list_token.get("children", []):
            if item["type"] == "list_item":
                items.append(self._extract_text_from_token(item))
        return items

    def _parse_population(
        self, section: Section, name: str, file_path: Path
    ) -> PopulationDefinition:
        location = SourceLocation(
            file_path=str(file_path),
            line_number=section.line_number,
            section_name=section.title,
        )

        properties: dict[str, str] = {}
        for line in section.content:
            if not line.strip():
                continue
            match = self.PROPERTY_PATTERN.match(line)
            if not match:
                raise DefinitionError(f"{location}: cannot parse property line '{line}'")
            prop_name, value = match.group(1), match.group(2).strip()
            if prop_name not in self.REQUIRED_PROPERTIES + self.OPTIONAL_PROPERTIES:
                raise DefinitionError(f"{location}: unknown property '{prop_name}'")
            if prop_name in properties:
                raise DefinitionError(f"{location}: property '{prop_name}' is set twice")
            properties[prop_name] = value

        missing = [p for p in self.REQUIRED_PROPERTIES if not properties.get(p)]
        if missing:
            raise DefinitionError(
                f"{location}: population '{name}' is missing {', '.join(missing)}"
            )

        return PopulationDefinition(
            name=name,
            secret=properties["secret"],
            ingredients=properties["ingredients"],
            store=properties.get("store"),
            location=location,
        )
