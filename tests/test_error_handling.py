"""Tests for the error hierarchy and central handler"""
import logging

import pytest

from xorbreak.error_handling import (
    ERROR_MESSAGES,
    ErrorCategory,
    ErrorContext,
    ErrorHandler,
    ErrorSeverity,
    InputError,
    MalformedInputError,
    NoCandidateFoundError,
    XorBreakError,
    create_error,
)


class TestErrors:

    def test_subclass_categories(self):
        assert InputError("x").category == ErrorCategory.INPUT_ERROR
        assert MalformedInputError("x").category == ErrorCategory.MALFORMED_INPUT
        assert NoCandidateFoundError("x").category == ErrorCategory.NO_CANDIDATE_FOUND
        assert XorBreakError("x").category == ErrorCategory.INTERNAL_ERROR

    def test_str_is_message(self):
        assert str(InputError("cannot read", suggestion="try again")) == "cannot read"

    def test_format_report_includes_context(self):
        error = MalformedInputError(
            "Invalid hex digit",
            context=ErrorContext(function="hex_to_bytes", position=3,
                                 additional_info={"line": 7}),
            suggestion="Check the input",
            original_exception=ValueError("bad digit"),
        )
        report = error.format_report()
        assert "ERROR: Malformed Input" in report
        assert "Function: hex_to_bytes" in report
        assert "Position: 3" in report
        assert "line: 7" in report
        assert "Suggestion: Check the input" in report
        assert "ValueError" in report


class TestCreateError:

    def test_formats_message(self):
        error = create_error("file_not_found", error_class=InputError, path="cipher.txt")
        assert isinstance(error, InputError)
        assert str(error) == "Ciphertext file not found: cipher.txt"
        assert error.suggestion == ERROR_MESSAGES["file_not_found"][1]

    def test_keeps_severity_and_context(self):
        context = ErrorContext(path="out.txt")
        error = create_error("write_failed", severity=ErrorSeverity.CRITICAL,
                             context=context, path="out.txt")
        assert error.severity == ErrorSeverity.CRITICAL
        assert error.context is context

    def test_unknown_key(self):
        error = create_error("no_such_error")
        assert type(error) is XorBreakError
        assert "no_such_error" in str(error)


class TestErrorHandler:

    def test_logs_message_with_suggestion(self, caplog):
        handler = ErrorHandler()
        with caplog.at_level(logging.INFO, logger="xorbreak"):
            handler.handle_error(InputError("cannot read", suggestion="check the path"))
        assert "cannot read (check the path)" in caplog.text
        assert caplog.records[-1].levelno == logging.ERROR

    def test_severity_sets_level(self, caplog):
        handler = ErrorHandler()
        with caplog.at_level(logging.INFO, logger="xorbreak"):
            handler.handle_error(XorBreakError("heads up", severity=ErrorSeverity.WARNING))
        assert caplog.records[-1].levelno == logging.WARNING

    def test_wraps_foreign_exceptions(self, caplog):
        handler = ErrorHandler()
        with caplog.at_level(logging.INFO, logger="xorbreak"):
            handler.handle_error(ValueError("plain failure"))
        assert "plain failure" in caplog.text

    def test_reraise(self):
        error = InputError("boom")
        with pytest.raises(InputError):
            ErrorHandler().handle_error(error, reraise=True)

    def test_single_console_handler(self):
        ErrorHandler()
        ErrorHandler(debug_mode=True)
        logger = logging.getLogger("xorbreak")
        consoles = [h for h in logger.handlers if getattr(h, "_xorbreak_console", False)]
        assert len(consoles) == 1
        assert logger.level == logging.DEBUG
        ErrorHandler().set_debug_mode(False)
        assert logger.level == logging.INFO
