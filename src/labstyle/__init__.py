"""Style-conformance checker for statistics and hydrology teaching labs."""

__version__ = "0.1.0"
