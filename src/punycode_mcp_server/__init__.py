"""
Punycode MCP Server - RFC 3492 Punycode and per-label IDNA conversion over MCP.
"""

from punycode_mcp_server.codec import decode, encode
from punycode_mcp_server.exceptions import (
    InvalidCodePointError,
    LabelConversionError,
    MalformedInputError,
    PunycodeError,
)
from punycode_mcp_server.labels import idna_decode, idna_encode

__version__ = "0.1.0"

__all__ = [
    "encode",
    "decode",
    "idna_encode",
    "idna_decode",
    "PunycodeError",
    "MalformedInputError",
    "InvalidCodePointError",
    "LabelConversionError",
]
