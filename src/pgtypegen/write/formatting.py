"""Formatter collaborators applied to every file before it is persisted.

A formatter is any ``(file_path, content) -> content`` callable. The default
pipes the content through an external command (prettier) and reads the
formatted text back from stdout.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable, Sequence

from pgtypegen.config.models import FormatterConfig
from pgtypegen.core.errors import FormatterError
from pgtypegen.core.logging import get_logger

log = get_logger(__name__)

Formatter = Callable[[str, str], str]


def identity_formatter(file_path: str, content: str) -> str:  # noqa: ARG001
    return content


class CommandFormatter:
    """Formats content by piping it through an external command.

    ``{path}`` in any argument is replaced with the target file path, which
    lets tools such as ``prettier --stdin-filepath {path}`` pick the parser
    and project configuration for that file.
    """

    def __init__(self, command: Sequence[str], *, timeout_sec: float = 30.0) -> None:
        if not command:
            raise ValueError("Formatter command must not be empty")
        self._command = list(command)
        self._timeout_sec = timeout_sec

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def __call__(self, file_path: str, content: str) -> str:
        cmd = [arg.replace("{path}", file_path) for arg in self._command]
        try:
            proc = subprocess.run(
                cmd,
                input=content,
                capture_output=True,
                text=True,
                check=True,
                timeout=self._timeout_sec,
            )
        except subprocess.CalledProcessError as exc:
            raise FormatterError.failed(file_path, cmd, exc.stderr.strip() or str(exc)) from exc
        except (subprocess.TimeoutExpired, OSError) as exc:
            raise FormatterError.failed(file_path, cmd, str(exc)) from exc
        return proc.stdout


def formatter_from_config(config: FormatterConfig) -> Formatter:
    """Build the configured formatter, falling back to identity if unavailable."""
    if not config.command:
        return identity_formatter
    if shutil.which(config.command[0]) is None:
        log.warning("formatter_not_found", command=config.command[0])
        return identity_formatter
    return CommandFormatter(config.command, timeout_sec=config.timeout_sec)
