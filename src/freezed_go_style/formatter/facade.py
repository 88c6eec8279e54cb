"""
Formatter facade: the orchestrator and the file/directory layer around it.

CompilationUnitFormatter walks the top-level declarations of one buffer:
marker gate -> constructor selection -> extraction -> column widths ->
rendering -> one composed span per declaration -> patch.

DartFormatter adds the IO: it reads a whole file, formats it in memory and
writes it back (atomically) only when the text changed.
"""

import fnmatch
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from tree_sitter import Node

from freezed_go_style.exceptions import ExtractionFailure, FreezedGoStyleError
from freezed_go_style.logging_config import logger
from freezed_go_style.parser import language_for, parse_source
from freezed_go_style.parser.nodes import is_kind
from freezed_go_style.schemas import FileResult, FormatSummary, ReplacementSpan
from freezed_go_style.user_config import UserConfig
from .buffer import SourceBuffer
from .columns import compute_column_widths
from .config import FORMATTER_CONFIG
from .extractor import extract_parameters
from .marker import class_annotations, has_marker
from .patcher import apply_spans, compose_spans
from .renderer import render_constructor
from .selector import Eligibility, class_name_of, select_constructors


def _relative_posix(path: Path, root: Optional[Path]) -> str:
    if root is not None and path.is_relative_to(root):
        return path.relative_to(root).as_posix()
    return path.name


@dataclass
class UnitOutcome:
    """Result of formatting one buffer."""
    text: str
    changed: bool
    constructors_formatted: int = 0
    constructors_skipped: int = 0


class CompilationUnitFormatter:
    """
    Formats the marked declarations of a single Dart source buffer.

    Holds no state between calls to format().
    """

    def __init__(
        self,
        marker_name: str = FORMATTER_CONFIG["marker_name"],
        indent_unit: str = FORMATTER_CONFIG["indent_unit"],
    ):
        self.marker_name = marker_name
        self.indent_unit = indent_unit

    def format(self, source: str, file_path: str = "<memory>") -> UnitOutcome:
        """
        Format a source string.

        Raises:
            ParseFailure: If no syntax tree can be built for the source
        """
        if self.marker_name not in source:
            logger.debug(f"{file_path}: marker '{self.marker_name}' not present, nothing to do")
            return UnitOutcome(source, False)

        buffer = SourceBuffer.from_text(source)
        language = language_for(Path(file_path)) or FORMATTER_CONFIG["language"]
        tree = parse_source(buffer.data, file_path, language)

        outcome = UnitOutcome(source, False)
        spans: List[ReplacementSpan] = []
        for declaration in tree.root_node.children:
            if not is_kind(declaration, "class"):
                continue
            span = self._format_declaration(declaration, buffer, outcome)
            if span is not None:
                spans.append(span)

        if spans:
            outcome.text = apply_spans(buffer.data, spans).decode("utf-8")
        outcome.changed = outcome.text != source
        return outcome

    def _format_declaration(
        self, declaration: Node, buffer: SourceBuffer, outcome: UnitOutcome
    ) -> Optional[ReplacementSpan]:
        class_name = class_name_of(declaration, buffer)
        annotations = class_annotations(declaration, buffer)
        marked = has_marker(annotations, self.marker_name)
        logger.debug(f"Class {class_name}: marked={marked}, metadata={annotations}")
        if not marked:
            return None

        if declaration.has_error:
            logger.warning(f"Class {class_name} contains syntax errors, leaving it untouched")
            outcome.constructors_skipped += 1
            return None

        spans = []
        for site, eligibility in select_constructors(declaration, class_name, buffer):
            if eligibility is not Eligibility.PRIMARY:
                continue
            try:
                span = self._format_constructor(site, buffer)
            except ExtractionFailure as e:
                logger.warning(str(e))
                outcome.constructors_skipped += 1
                continue
            if span is not None:
                spans.append(span)
                outcome.constructors_formatted += 1

        if not spans:
            return None
        return compose_spans(buffer, spans)

    def _format_constructor(self, site, buffer: SourceBuffer) -> Optional[ReplacementSpan]:
        if site.end is None or site.clause is None:
            raise ExtractionFailure(site.label, "no terminating ';' found")

        extracted = extract_parameters(site, buffer)
        parameters = extracted.parameters
        logger.debug(f"  {site.label}: {len(parameters)} parameter(s), style={extracted.style.value}")
        if not parameters:
            return None

        for index, param in enumerate(parameters):
            logger.debug(
                f"    [{index}] {param.name}: {param.type_text} "
                f"(decorators: {len(param.decorators)}, comments: {len(param.comments)})"
            )

        widths = compute_column_widths(parameters)
        text = render_constructor(
            head=site.head,
            style=extracted.style,
            clause=site.clause,
            parameters=parameters,
            widths=widths,
            indent=buffer.indent_at(site.start),
            indent_unit=self.indent_unit,
            newline=buffer.newline,
        )
        return ReplacementSpan(start=site.start, end=site.end, text=text)


def format_source(
    source: str,
    marker_name: str = FORMATTER_CONFIG["marker_name"],
    indent_unit: str = FORMATTER_CONFIG["indent_unit"],
) -> Tuple[str, bool]:
    """
    Format Dart source text.

    Returns:
        (new_text, changed)
    """
    outcome = CompilationUnitFormatter(marker_name, indent_unit).format(source)
    return outcome.text, outcome.changed


class DartFormatter:
    """
    Format Dart files and directories in place.

    Features:
    - Only files with a configured extension, minus ignore patterns
    - Whole-file read, in-memory format, atomic write only when changed
    - Per-file failures are reported, never raised out of a directory run
    """

    def __init__(self, config: Optional[UserConfig] = None):
        """
        Initialize formatter with optional config.

        Args:
            config: Merged user configuration (loaded from CWD if omitted)
        """
        self.config = config or UserConfig()
        self.unit_formatter = CompilationUnitFormatter(
            marker_name=self.config.marker_name,
            indent_unit=self.config.indent_unit,
        )

    @property
    def marker_name(self) -> str:
        return self.unit_formatter.marker_name

    def is_target(self, path: Path, root: Optional[Path] = None) -> bool:
        """
        True if path has a formatted extension and matches no ignore pattern.

        Patterns are matched against the path relative to root (the walked
        or watched directory), so directories above root never count.
        Without a root only the file name is matched.
        """
        path = Path(path)
        if path.suffix.lower() not in self.config.extensions:
            return False
        posix = "/" + _relative_posix(path, root)
        for pattern in self.config.ignore_patterns:
            if fnmatch.fnmatch(posix, pattern) or fnmatch.fnmatch(path.name, pattern):
                return False
        return True

    def format_file(self, path: Path, root: Optional[Path] = None) -> FileResult:
        """
        Format one file in place.

        Returns:
            FileResult; formatted=False with an error when the file was skipped
        """
        path = Path(path)
        result = FileResult(path=str(path))

        if not self.is_target(path, root):
            result.formatted = False
            result.error = f"not a target file ({', '.join(self.config.extensions)})"
            logger.debug(f"Skipping {path}: {result.error}")
            return result

        try:
            original = path.read_bytes().decode(FORMATTER_CONFIG["encoding"])
        except (OSError, UnicodeDecodeError) as e:
            result.formatted = False
            result.error = f"read failed: {e}"
            logger.error(f"Failed to read {path}: {e}")
            return result

        try:
            outcome = self.unit_formatter.format(original, str(path))
        except FreezedGoStyleError as e:
            result.formatted = False
            result.error = str(e)
            logger.error(str(e))
            return result

        result.constructors_formatted = outcome.constructors_formatted
        result.constructors_skipped = outcome.constructors_skipped

        if not outcome.changed:
            logger.debug(f"No changes needed for: {path}")
            return result

        try:
            self._atomic_write(path, outcome.text)
        except OSError as e:
            result.formatted = False
            result.error = f"write failed: {e}"
            logger.error(f"Failed to write {path}: {e}")
            return result

        result.changed = True
        logger.info(f"Formatted: {path}")
        return result

    def iter_files(self, directory: Path) -> List[Path]:
        """Target files below directory, in a stable order."""
        files = []
        for root, dirnames, filenames in os.walk(directory):
            dirnames.sort()
            for filename in sorted(filenames):
                candidate = Path(root) / filename
                if self.is_target(candidate, directory):
                    files.append(candidate)
        return files

    def format_directory(self, directory: Path) -> FormatSummary:
        """Format every target file below directory, one file at a time."""
        directory = Path(directory)
        summary = FormatSummary()
        for path in self.iter_files(directory):
            result = self.format_file(path, directory)
            summary.files_visited += 1
            if result.changed:
                summary.files_changed += 1
            summary.results.append(result)
        logger.debug(f"Visited {summary.files_visited} file(s), changed {summary.files_changed}")
        return summary

    def format_path(self, target: Path) -> FormatSummary:
        """Format a file or a directory."""
        target = Path(target)
        if target.is_dir():
            return self.format_directory(target)

        result = self.format_file(target)
        return FormatSummary(
            files_visited=1,
            files_changed=1 if result.changed else 0,
            results=[result],
        )

    def _atomic_write(self, path: Path, content: str) -> None:
        """
        Write file atomically using temp file + rename.

        Raises:
            OSError: If the temp file cannot be written or moved into place
        """
        fd, temp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(content.encode(FORMATTER_CONFIG["encoding"]))
            shutil.copymode(str(path), temp_path)
            os.replace(temp_path, str(path))
        except OSError:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise
        logger.debug(f"Atomic write completed: {path}")
