"""Rules engine for lab document style checks.

This package intentionally contains only domain logic:
- Rule inputs are parsed blocks + style config.
- No file, network, or terminal I/O lives here.
"""

from .config import StyleConfig, load_style_config
from .context import RuleContext
from .errors import ConfigError, LabStyleError, ParseError
from .models import Block, BlockKind, LineRange, Report, Violation
from .report import build_report, exit_status, render_text
from .runner import RuleEngine, evaluate

# Import built-in rules so they self-register with the global registry.
from . import rules as _builtin_rules  # noqa: F401
