from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BlockKind(str, Enum):
    HEADER = "header"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    CODE_BLOCK = "code_block"
    ANNOTATION = "annotation"
    YAML_HEADER = "yaml_header"


class LineRange(BaseModel):
    """Inclusive, 1-based line span in the original document text."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=1)
    end: int = Field(ge=1)

    @model_validator(mode="after")
    def _check_order(self) -> "LineRange":
        if self.end < self.start:
            raise ValueError("LineRange end must not precede start")
        return self

    @classmethod
    def single(cls, line: int) -> "LineRange":
        return cls(start=line, end=line)

    def __str__(self) -> str:
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}-{self.end}"


class Block(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    raw_text: str
    line_range: LineRange
    # Fence info string language, code blocks only.
    language: Optional[str] = None
    # 1-6, headers only.
    level: Optional[int] = None

    def numbered_lines(self) -> List[tuple[int, str]]:
        start = self.line_range.start
        return [(start + offset, line) for offset, line in enumerate(self.raw_text.split("\n"))]

    def content_lines(self) -> List[tuple[int, str]]:
        """Lines without the opening and closing fence for code blocks."""
        lines = self.numbered_lines()
        if self.kind == BlockKind.CODE_BLOCK:
            return lines[1:-1]
        return lines


class Violation(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_name: str
    line_range: LineRange
    message: str


class Report(BaseModel):
    document: Optional[str] = None
    passed: bool
    violation_count: int = 0
    violations: List[Violation] = Field(default_factory=list)
    totals: Dict[str, int] = Field(default_factory=dict)
