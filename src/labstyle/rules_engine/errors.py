from __future__ import annotations

from typing import Optional


class LabStyleError(ValueError):
    """Base class for errors that stop a document from being checked."""


class ParseError(LabStyleError):
    def __init__(self, reason: str, line: int):
        self.reason = reason
        self.line = line
        super().__init__(f"document could not be parsed: {reason} at line {line}")


class ConfigError(LabStyleError):
    def __init__(self, message: str, *, rule_id: Optional[str] = None):
        self.rule_id = rule_id
        super().__init__(message)
