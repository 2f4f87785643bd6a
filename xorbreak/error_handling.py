"""
Error handling and reporting for xorbreak.

Every failure the pipeline can report is an XorBreakError subclass carrying a
category (which the CLI and the web API map to exit codes and HTTP statuses),
a severity, optional context and a suggestion for the user. ErrorHandler logs
them through the ``xorbreak`` logger.
"""

import sys
import traceback
import logging
from enum import Enum
from typing import Optional, Dict, Any
from dataclasses import dataclass, fields


class ErrorSeverity(Enum):
    """Error severity levels."""
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class ErrorCategory(Enum):
    """What kind of failure an error reports."""
    INVALID_ARGUMENT = "Invalid Argument"
    NO_CANDIDATE_FOUND = "No Candidate Found"
    MALFORMED_INPUT = "Malformed Input"
    INPUT_ERROR = "Input Error"
    CONFIGURATION_ERROR = "Configuration Error"
    INTERNAL_ERROR = "Internal Error"


_LOG_LEVELS = {
    ErrorSeverity.CRITICAL: logging.CRITICAL,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.INFO: logging.INFO,
}


@dataclass
class ErrorContext:
    """Where an error happened."""
    function: Optional[str] = None
    path: Optional[str] = None
    keysize: Optional[int] = None
    position: Optional[int] = None         # 1-based line or 0-based character index
    additional_info: Optional[Dict[str, Any]] = None


class XorBreakError(Exception):
    """
    Base exception class for xorbreak errors.

    Subclasses only pin the category; ``str(error)`` is the bare message and
    ``format_report()`` renders everything known about the failure.
    """

    category = ErrorCategory.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: Optional[ErrorContext] = None,
        suggestion: Optional[str] = None,
        original_exception: Optional[Exception] = None,
        category: Optional[ErrorCategory] = None
    ):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.context = context or ErrorContext()
        self.suggestion = suggestion
        self.original_exception = original_exception
        if category is not None:
            self.category = category

    def __str__(self):
        return self.message

    def format_report(self) -> str:
        """Multi-line report used by ``--debug``."""
        rule = '=' * 70
        lines = ["", rule, f"{self.severity.value}: {self.category.value}", rule,
                 f"Message: {self.message}"]

        labels = {'function': 'Function', 'path': 'File', 'keysize': 'Keysize',
                  'position': 'Position'}
        for item in fields(ErrorContext):
            value = getattr(self.context, item.name)
            if item.name in labels and value is not None:
                lines.append(f"{labels[item.name]}: {value}")

        for key, value in (self.context.additional_info or {}).items():
            lines.append(f"  {key}: {value}")

        if self.suggestion:
            lines.append(f"Suggestion: {self.suggestion}")

        if self.original_exception is not None:
            cause = self.original_exception
            lines.append(f"Caused by {type(cause).__name__}: {cause}")

        lines.append(rule)
        return "\n".join(lines)


class InvalidArgumentError(XorBreakError):
    """Caller violated a function contract (empty key, bad sizes)."""
    category = ErrorCategory.INVALID_ARGUMENT


class NoCandidateFoundError(XorBreakError):
    """Statistical search exhausted its options without a qualifying result."""
    category = ErrorCategory.NO_CANDIDATE_FOUND


class MalformedInputError(XorBreakError):
    """Hex, Base64 or bit-string input contains invalid characters."""
    category = ErrorCategory.MALFORMED_INPUT


class InputError(XorBreakError):
    """Ciphertext could not be read, or output could not be written."""
    category = ErrorCategory.INPUT_ERROR


class ConfigurationError(XorBreakError):
    """A tuning parameter is out of range."""
    category = ErrorCategory.CONFIGURATION_ERROR


class ErrorHandler:
    """Logs errors that reach the top of the CLI."""

    def __init__(self, debug_mode: bool = False):
        self.debug_mode = debug_mode
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        level = logging.DEBUG if self.debug_mode else logging.INFO
        logger = logging.getLogger("xorbreak")
        logger.setLevel(level)

        # Only one console handler per process
        if not any(getattr(h, "_xorbreak_console", False) for h in logger.handlers):
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler._xorbreak_console = True
            console_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            logger.addHandler(console_handler)

        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    def set_debug_mode(self, debug_mode: bool):
        """Switch between INFO and DEBUG output."""
        self.debug_mode = debug_mode
        self.logger = self._setup_logger()

    def handle_error(
        self,
        error: Exception,
        context: Optional[ErrorContext] = None,
        reraise: bool = False
    ):
        """
        Log an error, wrapping foreign exceptions as internal errors.

        Args:
            error: The exception to handle
            context: Context for exceptions that carry none
            reraise: Re-raise the original exception after logging
        """
        if not isinstance(error, XorBreakError):
            error = XorBreakError(str(error), context=context, original_exception=error)

        if self.debug_mode:
            message = error.format_report()
        elif error.suggestion:
            message = f"{error} ({error.suggestion})"
        else:
            message = str(error)
        self.logger.log(_LOG_LEVELS[error.severity], message)

        if self.debug_mode:
            traceback.print_exc()

        if reraise:
            raise error.original_exception or error


# Process-wide handler shared by the CLI
_error_handler: Optional[ErrorHandler] = None


def get_error_handler(debug_mode: bool = False) -> ErrorHandler:
    """Get or create the global error handler."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler(debug_mode=debug_mode)
    elif debug_mode and not _error_handler.debug_mode:
        _error_handler.set_debug_mode(True)
    return _error_handler


# Message templates and the hint shown with each
ERROR_MESSAGES = {
    "file_not_found": (
        "Ciphertext file not found: {path}",
        "Check that the file path is correct and the file exists."
    ),
    "not_a_file": (
        "Not a file: {path}",
        "Pass a regular file containing Base64 lines or hex text."
    ),
    "empty_input": (
        "No ciphertext provided",
        "Pass a file, use --hex, or pipe ciphertext on stdin."
    ),
    "unknown_encoding": (
        "Unknown input encoding: {encoding}",
        "Use one of: base64, hex."
    ),
    "no_keysize": (
        "Could not recover a key for any candidate keysize ({keysizes})",
        "Try more candidate keysizes or lower the printable ratio threshold."
    ),
    "write_failed": (
        "Cannot write to output file: {path}",
        "Check that the directory exists and is writable."
    ),
}


def create_error(
    error_key: str,
    error_class: type = XorBreakError,
    severity: ErrorSeverity = ErrorSeverity.ERROR,
    context: Optional[ErrorContext] = None,
    **format_args
) -> XorBreakError:
    """
    Build an error from an ERROR_MESSAGES template.

    Unknown keys produce a plain XorBreakError naming the key.
    """
    if error_key not in ERROR_MESSAGES:
        return XorBreakError(f"Unknown error: {error_key}", severity=severity, context=context)

    template, suggestion = ERROR_MESSAGES[error_key]
    return error_class(
        template.format(**format_args),
        severity=severity,
        context=context,
        suggestion=suggestion
    )
