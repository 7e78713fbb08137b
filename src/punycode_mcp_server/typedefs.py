"""Type definitions for Punycode and IDNA conversion results.

This module provides the dataclass and TypedDict types returned by the tool
implementations of the Punycode Model Context Protocol (MCP) server. They keep
the result shapes consistent across tools and document them for API consumers.
"""

from dataclasses import dataclass, field
from typing import Any, TypedDict


@dataclass
class ToolResult:
    """Stores the result of a conversion tool operation."""

    success: bool
    output: str | list[str] | dict[str, Any] | list[dict[str, Any]] | None = None
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


class LabelReport(TypedDict):
    """A TypedDict describing how one hostname label was converted.

    Attributes:
        label (str): The Unicode form of the label.
        ace (str): The ASCII form of the label as it appears in the ACE hostname.
        encoded (bool): Whether the label was Punycode encoded and prefixed.
    """

    label: str
    ace: str
    encoded: bool
