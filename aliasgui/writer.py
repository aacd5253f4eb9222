"""Write generated aliases into a managed block of the shell config"""

import logging
from pathlib import Path
from typing import List

from aliasgui.dialects import Dialect
from aliasgui.exceptions import ConfigIOError

logger = logging.getLogger(__name__)

BLOCK_START = "# === AliasGUI Managed Aliases START ==="
BLOCK_END = "# === AliasGUI Managed Aliases END ==="


def read_config(path: Path) -> str:
    """Read the config file, or return an empty string when it is absent"""
    path = Path(path)
    if not path.exists():
        return ""
    try:
        # newline="" keeps CRLF files byte-identical outside the block
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as e:
        raise ConfigIOError(f"Failed to read {path}: {e}") from e


class ManagedBlockWriter:
    """Merge generated alias text into the config, leaving user content alone"""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect
        self.syntax = dialect.syntax

    def build_block(self, body: str) -> str:
        return f"{BLOCK_START}\n{body}\n{BLOCK_END}"

    def strip_scattered_definitions(self, content: str) -> str:
        """Remove alias and function definitions living outside any block.

        Used on first adoption of a file, so definitions the tool is about to
        manage do not end up defined twice.
        """
        kept: List[str] = []
        depth = 0
        skipping = False

        for line in content.split("\n"):
            if skipping:
                depth += line.count("{") - line.count("}")
                if depth <= 0:
                    skipping = False
                    depth = 0
                continue

            if self.syntax.match_alias(line) or self.syntax.match_function(line):
                continue

            if self.syntax.match_function_start(line):
                skipping = True
                depth = 1
                continue

            kept.append(line)

        return "\n".join(kept)

    def merge(self, content: str, body: str) -> str:
        """Return the new file content for a given alias body"""
        block = self.build_block(body)
        start = content.find(BLOCK_START)
        end = content.find(BLOCK_END, start) if start != -1 else -1

        if start != -1 and end > start:
            # A stray START left above the block must not swallow user content
            start = content.rfind(BLOCK_START, 0, end)
            return content[:start] + block + content[end + len(BLOCK_END):]

        cleaned = self.strip_scattered_definitions(content).rstrip()
        if not cleaned:
            return block + "\n"
        return cleaned + "\n\n" + block + "\n"

    def write(self, path: Path, body: str) -> None:
        """Persist body into the managed block of path"""
        path = Path(path)
        content = read_config(path)
        new_content = self.merge(content, body)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(new_content)
        except OSError as e:
            raise ConfigIOError(f"Failed to write {path}: {e}") from e

        if BLOCK_START not in content:
            logger.info("Adopted %s: created managed alias block", path)
        logger.info("Wrote %d alias lines to %s", len(body.splitlines()), path)


def merge_managed_block(content: str, body: str, dialect: Dialect = Dialect.POSIX) -> str:
    return ManagedBlockWriter(dialect).merge(content, body)
