"""Implementation oracle backed by ``gopls implementation`` plus a file reader."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from .config import GonavConfig
from .errors import OracleError
from .lines import split_lines
from .models import Location, SourceLine


logger = logging.getLogger(__name__)

# gopls prints one span per line: path:line:col[-[end_line:]end_col], 1-based.
SPAN_RE = re.compile(
    r"^(?P<path>.+?):(?P<line>\d+):(?P<col>\d+)"
    r"(?:-(?:(?P<end_line>\d+):)?(?P<end_col>\d+))?$"
)


class GoplsOracle:
    def __init__(self, gopls_path: str = "gopls", timeout_seconds: float = 30.0) -> None:
        self.gopls_path = gopls_path
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_config(cls, config: GonavConfig) -> "GoplsOracle":
        return cls(config.gopls_path, config.gopls_timeout_seconds)

    def lookup(self, document_id: str, line: int, column: int) -> list[Location]:
        target = Path(document_id).resolve()
        position = f"{target}:{line + 1}:{column + 1}"
        command = [self.gopls_path, "implementation", position]
        logger.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                cwd=str(target.parent) if target.parent.is_dir() else None,
            )
        except FileNotFoundError as exc:
            raise OracleError(f"gopls not found at {self.gopls_path!r}") from exc
        except subprocess.TimeoutExpired as exc:
            raise OracleError(
                f"gopls timed out after {self.timeout_seconds:g}s"
            ) from exc

        if result.returncode != 0:
            message = result.stderr.strip() or f"exit status {result.returncode}"
            raise OracleError(f"gopls implementation failed: {message}")

        return parse_spans(result.stdout)


def parse_spans(output: str) -> list[Location]:
    """Convert gopls span lines into zero-based locations."""
    locations: list[Location] = []
    for raw in output.splitlines():
        raw = raw.strip()
        if not raw:
            continue
        match = SPAN_RE.match(raw)
        if not match:
            logger.debug("Ignoring unrecognised gopls output: %s", raw)
            continue
        line = int(match.group("line")) - 1
        end_line = line
        if match.group("end_line"):
            end_line = int(match.group("end_line")) - 1
        end_column = None
        if match.group("end_col"):
            end_column = int(match.group("end_col")) - 1
        locations.append(
            Location(
                document_id=match.group("path"),
                line=line,
                column=int(match.group("col")) - 1,
                end_line=end_line,
                end_column=end_column,
            )
        )
    return locations


class FileDocumentAccessor:
    """Open documents from disk; the document id is the file path."""

    def open(self, document_id: str) -> tuple[SourceLine, ...]:
        text = Path(document_id).read_text(encoding="utf-8", errors="replace")
        return split_lines(text)
