"""Generate a cross-linked HTML reference from a Kconfig tree."""

from .cli import generate_html, main
from .errors import ExitCode, KconfigError

__all__ = ["ExitCode", "KconfigError", "generate_html", "main"]
