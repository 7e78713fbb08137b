"""
Tool Mixin classes for PunycodeMCPServer to separate concerns.
"""

from typing import Any

from fastmcp import Context

from punycode_mcp_server.tools import (
    hostname_check_impl,
    idna_decode_impl,
    idna_encode_impl,
    punycode_decode_impl,
    punycode_encode_impl,
)
from punycode_mcp_server.typedefs import ToolResult


class ToolRegistrationMixin:
    """Mixin for registering conversion tools with the MCP server.

    Note: This mixin assumes the class has 'server' (FastMCP) and 'config' (dict)
    attributes available when register_tools() is called.
    """

    # Type hints for attributes provided by the host class
    server: Any  # FastMCP instance
    config: dict[str, Any]  # Configuration dictionary

    def register_tools(self) -> None:
        """Register all Punycode and IDNA tools with the MCP server."""

        @self.server.tool(
            name="idna_encode",
            description=(
                "Use this tool to convert the specified internationalized domain name (IDN) "
                "into punycode format. Every label that is not plain ASCII gets the `xn--` prefix."
            ),
            tags=set(("idn", "idna", "punycode", "converter", "encode")),
            enabled=True,
        )
        async def idna_encode(hostname: str, ctx: Context) -> ToolResult:
            await ctx.info(f"Performing punycode conversion for domain `{hostname}`.")
            return await idna_encode_impl(hostname)

        @self.server.tool(
            name="idna_decode",
            description=(
                "Use this tool to convert a punycode domain name with `xn--` labels "
                "back to its Unicode form."
            ),
            tags=set(("idn", "idna", "punycode", "converter", "decode")),
            enabled=True,
        )
        async def idna_decode(hostname: str, ctx: Context) -> ToolResult:
            await ctx.info(f"Performing Unicode conversion for domain `{hostname}`.")
            return await idna_decode_impl(hostname)

        @self.server.tool(
            name="punycode_encode",
            description=(
                "Use this tool to encode an arbitrary Unicode string with the raw RFC 3492 "
                "Punycode algorithm. No ACE prefix is added and no label splitting is done."
            ),
            tags=set(("punycode", "rfc3492", "encode")),
            enabled=self.config.get("features", {}).get("raw_punycode", False),
        )
        async def punycode_encode(text: str, ctx: Context) -> ToolResult:
            await ctx.info(f"Encoding `{text}` as Punycode.")
            return await punycode_encode_impl(text)

        @self.server.tool(
            name="punycode_decode",
            description=(
                "Use this tool to decode a raw RFC 3492 Punycode string (without the "
                "`xn--` prefix) to Unicode."
            ),
            tags=set(("punycode", "rfc3492", "decode")),
            enabled=self.config.get("features", {}).get("raw_punycode", False),
        )
        async def punycode_decode(text: str, ctx: Context) -> ToolResult:
            await ctx.info(f"Decoding Punycode `{text}`.")
            return await punycode_decode_impl(text)

        @self.server.tool(
            name="hostname_check",
            description=(
                "Use this tool to show the ACE form of every label of a hostname and to "
                "validate the result according to DNS RFC rules."
            ),
            tags=set(("idn", "validation", "FQDN", "labels")),
            enabled=self.config.get("features", {}).get("hostname_validation", False),
        )
        async def hostname_check(hostname: str, ctx: Context) -> ToolResult:
            await ctx.info(f"Checking hostname `{hostname}`.")
            return await hostname_check_impl(hostname)
