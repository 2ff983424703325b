"""Exit codes and the exception hierarchy for kconfig2html."""

from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    SUCCESS = 0
    UNRECOGNIZED_OPTION = 1
    MISSING_OPTION_ARGUMENT = 2
    UNEXPECTED_OPTION = 3
    TOO_MANY_ARGUMENTS = 4
    OUTFILE_OPEN_FAILURE = 5
    TMPFILE_OPEN_FAILURE = 6
    KCONFIG_OPEN_FAILURE = 7
    TOO_MANY_DEPENDENCIES = 8
    DEPENDENCIES_UNDERFLOW = 9
    NESTING_TOO_DEEP = 10
    NESTING_UNDERFLOW = 11
    TEMPLATE_LOAD_FAILURE = 12


class KconfigError(Exception):
    """Base class for fatal errors. Subclasses set the process exit code."""

    exit_code: ExitCode

    def __init__(self, message: str, path: Optional[str] = None, lineno: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.lineno = lineno

    def __str__(self) -> str:
        if self.path is not None and self.lineno is not None:
            return f"{self.path}:{self.lineno}: {self.message}"
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class UsageError(KconfigError):
    """Bad command line. The exit code is chosen by the caller."""

    def __init__(self, message: str, exit_code: ExitCode):
        super().__init__(message)
        self.exit_code = exit_code


class OutputOpenError(KconfigError):
    exit_code = ExitCode.OUTFILE_OPEN_FAILURE


class StagingError(KconfigError):
    exit_code = ExitCode.TMPFILE_OPEN_FAILURE


class KconfigOpenError(KconfigError):
    exit_code = ExitCode.KCONFIG_OPEN_FAILURE


class DependencyOverflowError(KconfigError):
    exit_code = ExitCode.TOO_MANY_DEPENDENCIES


class DependencyUnderflowError(KconfigError):
    exit_code = ExitCode.DEPENDENCIES_UNDERFLOW


class NestingOverflowError(KconfigError):
    exit_code = ExitCode.NESTING_TOO_DEEP


class NestingUnderflowError(KconfigError):
    exit_code = ExitCode.NESTING_UNDERFLOW


class TemplateError(KconfigError):
    exit_code = ExitCode.TEMPLATE_LOAD_FAILURE
