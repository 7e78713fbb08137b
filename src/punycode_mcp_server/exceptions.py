"""Exception handling and error processing for Punycode operations.

This module provides custom exception types and error handling utilities for the
Punycode codec, the per-label IDNA wrapper and the Model Context Protocol (MCP)
tools built on top of them.

The module serves three main purposes:
1. Define the exception hierarchy raised by the codec and the label wrapper
2. Provide consistent error message formatting for conversion errors
3. Map dnspython name exceptions to human-readable messages

Note: Every codec failure is terminal for the call that raised it. Nothing in
this package returns a partially converted string.
"""

import dns.exception
import dns.name


class PunycodeError(ValueError):
    """Base exception for Punycode encoding and decoding errors."""


class MalformedInputError(PunycodeError):
    """Raised when a Punycode string does not follow the encoded form.

    Covers characters outside the base-36 digit alphabet, non-ASCII characters
    in front of the delimiter and digit groups cut short by the end of input.
    """

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.position = position


class InvalidCodePointError(PunycodeError):
    """Raised when a source or decoded scalar is outside the accepted range."""

    def __init__(self, message: str, code_point: int | None = None):
        super().__init__(message)
        self.code_point = code_point


class LabelConversionError(PunycodeError):
    """Raised when one label of a hostname cannot be converted.

    The codec error is kept as ``__cause__``.
    """

    def __init__(self, label: str, index: int, reason: str):
        super().__init__(f"Label {index} ('{label}') could not be converted: {reason}")
        self.label = label
        self.index = index
        self.reason = reason


def handle_codec_error(error: Exception) -> str:
    """Convert conversion-related exceptions to descriptive error messages."""
    err_str = f"Unexpected error: {str(error)}"
    if isinstance(error, MalformedInputError):
        err_str = f"Malformed Punycode input: {str(error)}"
    if isinstance(error, InvalidCodePointError):
        err_str = f"Invalid code point: {str(error)}"
    if isinstance(error, LabelConversionError):
        err_str = f"Hostname conversion failed: {str(error)}"
    if isinstance(error, dns.exception.DNSException):
        err_str = f"DNS name error: {str(error)}"
    if isinstance(error, dns.name.LabelTooLong):
        err_str = "Domain name label too long"
    if isinstance(error, dns.name.NameTooLong):
        err_str = "Domain name too long"
    if isinstance(error, dns.name.EmptyLabel):
        err_str = "Domain name contains an empty label"
    if isinstance(error, dns.name.BadEscape):
        err_str = "Invalid escape sequence in domain name"
    return err_str
