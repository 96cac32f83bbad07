from __future__ import annotations

import logging
import re
from typing import Any, Optional

from labstyle.rules_engine.context import ORDERED_ITEM_RE, annotation_markers
from labstyle.rules_engine.errors import ParseError
from labstyle.rules_engine.models import Block, BlockKind, LineRange

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"^ {0,3}(#{1,6})(?=[ \t]|$)")
_FENCE_OPEN_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*$")
_LIST_ITEM_RE = re.compile(r"^[ \t]*(?:[-*+]|\d{1,9}[.)])(?:[ \t]+|$)")
_FRONT_MATTER_OPEN = "---"
_FRONT_MATTER_CLOSE = ("---", "...")


def parse(text: str) -> tuple[Block, ...]:
    """
    Split a lab document into an ordered tuple of typed blocks.

    Recognised structure:
      - YAML header: `---` on line 1 through the next `---` / `...` line
      - headers: `#` to `######` followed by whitespace
      - fenced code blocks (``` or ~~~), language taken from the info string
      - list items: bulleted or numbered, one block per contiguous run
      - annotation: numbered list directly after a code block with `# <n>` markers
      - paragraphs: every other run of non-blank lines

    Raises ParseError when a code fence is never closed.
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    blocks: list[Block] = []
    i = 0

    front_matter_end = _front_matter_end(lines)
    if front_matter_end is not None:
        blocks.append(_make_block(BlockKind.YAML_HEADER, lines, 0, front_matter_end))
        i = front_matter_end + 1

    expect_annotation = False
    while i < len(lines):
        line = lines[i]
        if not line.strip():
            i += 1
            continue

        fence = _match_fence(line)
        if fence:
            end = _fence_close(lines, i, fence.group("fence"))
            block = _make_block(
                BlockKind.CODE_BLOCK,
                lines,
                i,
                end,
                language=_fence_language(fence.group("info")),
            )
            blocks.append(block)
            expect_annotation = bool(annotation_markers(block))
            i = end + 1
            continue

        if expect_annotation and ORDERED_ITEM_RE.match(line):
            end = _list_end(lines, i)
            blocks.append(_make_block(BlockKind.ANNOTATION, lines, i, end))
            expect_annotation = False
            i = end + 1
            continue
        expect_annotation = False

        header = _HEADER_RE.match(line)
        if header:
            blocks.append(_make_block(BlockKind.HEADER, lines, i, i, level=len(header.group(1))))
            i += 1
            continue

        if _LIST_ITEM_RE.match(line):
            end = _list_end(lines, i)
            blocks.append(_make_block(BlockKind.LIST_ITEM, lines, i, end))
            i = end + 1
            continue

        end = _paragraph_end(lines, i)
        blocks.append(_make_block(BlockKind.PARAGRAPH, lines, i, end))
        i = end + 1

    logger.debug("Parsed %d line(s) into %d block(s)", len(lines), len(blocks))
    return tuple(blocks)


def _make_block(kind: BlockKind, lines: list[str], start: int, end: int, **extra: Any) -> Block:
    return Block(
        kind=kind,
        raw_text="\n".join(lines[start : end + 1]),
        line_range=LineRange(start=start + 1, end=end + 1),
        **extra,
    )


def _front_matter_end(lines: list[str]) -> Optional[int]:
    if not lines or lines[0].rstrip() != _FRONT_MATTER_OPEN:
        return None
    for j in range(1, len(lines)):
        if lines[j].rstrip() in _FRONT_MATTER_CLOSE:
            return j
    # Unclosed front matter is ordinary content.
    return None


def _fence_close(lines: list[str], start: int, opening: str) -> int:
    for j in range(start + 1, len(lines)):
        match = _FENCE_CLOSE_RE.match(lines[j])
        if not match:
            continue
        fence = match.group("fence")
        if fence[0] == opening[0] and len(fence) >= len(opening):
            return j
    raise ParseError("unterminated code fence", line=start + 1)


def _fence_language(info: str) -> Optional[str]:
    """
    Language from a fence info string.

    ```python      -> python
    ```{r}         -> r
    ```{r, echo=FALSE} -> r
    ```{.python}   -> python
    """
    info = info.strip()
    if not info:
        return None
    if info.startswith("{"):
        info = info.strip("{}").strip()
    token = re.split(r"[\s,]+", info, maxsplit=1)[0].lstrip(".")
    return token or None


def _match_fence(line: str) -> Optional["re.Match[str]"]:
    match = _FENCE_OPEN_RE.match(line)
    # A backtick run followed by more backticks on the line is inline code, not a fence.
    if match and match.group("fence")[0] == "`" and "`" in match.group("info"):
        return None
    return match


def _starts_block(line: str) -> bool:
    return bool(_HEADER_RE.match(line) or _match_fence(line) or _LIST_ITEM_RE.match(line))


def _list_end(lines: list[str], start: int) -> int:
    end = start
    while end + 1 < len(lines):
        nxt = lines[end + 1]
        if not nxt.strip():
            break
        # Indented lines continue the current item; anything else must be another item.
        if _LIST_ITEM_RE.match(nxt) or nxt[:1] in (" ", "\t"):
            end += 1
            continue
        break
    return end


def _paragraph_end(lines: list[str], start: int) -> int:
    end = start
    while end + 1 < len(lines):
        nxt = lines[end + 1]
        if not nxt.strip() or _starts_block(nxt):
            break
        end += 1
    return end
