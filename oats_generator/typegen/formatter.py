"""Format generated TypeScript with prettier."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from oats_generator.shared.errors import FormatterError

logger = logging.getLogger(__name__)


def find_prettier() -> str | None:
    """Locate a prettier executable on PATH."""
    return shutil.which("prettier")


def format_typescript(text: str, filepath: str | Path = "generated.ts") -> str:
    """Format TypeScript source with prettier.

    `filepath` is passed as `--stdin-filepath` so prettier resolves the
    project's configuration for it. Without prettier on PATH the text is
    returned with trailing whitespace stripped.

    Raises:
        FormatterError: If prettier rejects the source.
    """
    prettier = find_prettier()
    if prettier is None:
        logger.warning("prettier not found on PATH, output is left unformatted")
        return "\n".join(line.rstrip() for line in text.strip().splitlines()) + "\n"

    command = [prettier, "--parser", "typescript", "--stdin-filepath", str(filepath)]
    logger.debug("$ %s", " ".join(command))
    try:
        result = subprocess.run(
            command,
            input=text,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise FormatterError(f"prettier failed: {e.stderr.strip()}") from e
    return result.stdout
