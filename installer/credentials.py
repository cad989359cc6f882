# installer/credentials.py
# -*- coding: utf-8 -*-
"""
Plaintext credentials log kept in the operator's home directory.

The file holds titled blocks:

    ## Paperless-ngx Database
    Paperless-ngx Database User: paperless
    Paperless-ngx Database Password: ...

Recording a block whose title is already present replaces the old block and
appends the new one at the end of the file, so each title appears once.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

module_logger = logging.getLogger(__name__)

BLOCK_HEADER_PREFIX = "## "


def _split_blocks(lines: List[str]) -> List[List[str]]:
    blocks: List[List[str]] = []
    for line in lines:
        if line.startswith(BLOCK_HEADER_PREFIX) or not blocks:
            blocks.append([line])
        else:
            blocks[-1].append(line)
    return blocks


def render_block(title: str, entries: Dict[str, str]) -> List[str]:
    lines = [f"{BLOCK_HEADER_PREFIX}{title}"]
    lines.extend(f"{label}: {value}" for label, value in entries.items())
    lines.append("")
    return lines


class CredentialsLog:
    """Appends credential blocks to a 0600 plaintext file."""

    def __init__(self, path: Path, logger: Optional[logging.Logger] = None):
        self.path = Path(path)
        self.logger = logger or module_logger

    def read_lines(self) -> List[str]:
        if not self.path.exists():
            return []
        return self.path.read_text(encoding="utf-8").splitlines()

    def titles(self) -> List[str]:
        return [
            line[len(BLOCK_HEADER_PREFIX):]
            for line in self.read_lines()
            if line.startswith(BLOCK_HEADER_PREFIX)
        ]

    def record(self, title: str, entries: Dict[str, str]) -> None:
        """Write the block for title at the end of the file."""
        header = f"{BLOCK_HEADER_PREFIX}{title}"
        kept: List[str] = []
        for block in _split_blocks(self.read_lines()):
            if block[0] == header:
                self.logger.info(
                    f"Replacing existing '{title}' block in {self.path}"
                )
                continue
            kept.extend(block)

        lines = kept + render_block(title, entries)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
        os.chmod(self.path, 0o600)
        self.logger.info(f"Recorded '{title}' credentials in {self.path}")
