from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from .config import StyleConfig
from .models import Block, BlockKind

# Quarto-style code annotation marker at the end of a code line, e.g. `x <- 1 # <1>`.
ANNOTATION_MARKER_RE = re.compile(r"(?:#|//|--|%)\s*<(\d+)>\s*$")
ORDERED_ITEM_RE = re.compile(r"^ {0,3}(\d{1,9})[.)](?:[ \t]+|$)")


@dataclass(frozen=True)
class RuleContext:
    blocks: tuple[Block, ...]
    config: StyleConfig = field(default_factory=StyleConfig)

    def neighbours(self, index: int) -> tuple[Optional[Block], Optional[Block]]:
        prev_block = self.blocks[index - 1] if index > 0 else None
        next_block = self.blocks[index + 1] if index + 1 < len(self.blocks) else None
        return prev_block, next_block

    def following(self, index: int) -> Optional[Block]:
        return self.neighbours(index)[1]


def blank_lines_between(first: Block, second: Block) -> int:
    # Every non-blank line belongs to some block, so the gap is all blank lines.
    return max(0, second.line_range.start - first.line_range.end - 1)


def annotation_markers(block: Block) -> list[tuple[int, int]]:
    """(line, marker number) pairs for every annotation marker in a code block."""
    if block.kind != BlockKind.CODE_BLOCK:
        return []
    found: list[tuple[int, int]] = []
    for line_no, line in block.content_lines():
        match = ANNOTATION_MARKER_RE.search(line)
        if match:
            found.append((line_no, int(match.group(1))))
    return found


def annotation_items(block: Block) -> list[tuple[int, int]]:
    """(line, number) pairs for each numbered explanation in an annotation block."""
    found: list[tuple[int, int]] = []
    for line_no, line in block.numbered_lines():
        match = ORDERED_ITEM_RE.match(line)
        if match:
            found.append((line_no, int(match.group(1))))
    return found
