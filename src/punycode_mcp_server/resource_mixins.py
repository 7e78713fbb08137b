"""Mixin classes for PunycodeMCPServer to separate concerns and improve maintainability."""

from typing import Any, Dict

from punycode_mcp_server import codec
from punycode_mcp_server.labels import ACE_PREFIX, HOST_ALLOWED_CHARS


class ResourceRegistrationMixin:
    """Mixin for registering resources with the MCP server.

    Note: This mixin assumes the class has 'server' (FastMCP) and 'config' (dict)
    attributes available when registration methods are called.
    """

    # Type hints for attributes provided by the host class
    server: Any  # FastMCP instance
    config: Dict[str, Any]  # Configuration dictionary

    def register_codec_resources(self) -> None:
        """Register Punycode parameter resources."""

        @self.server.resource(
            uri="resource://punycode_parameters",
            name="punycode_parameters",
            description="The RFC 3492 Bootstring parameters and digit alphabet used by this server.",
        )
        async def get_punycode_parameters() -> Dict[str, Any]:
            return await self._get_punycode_parameters_impl()

        @self.server.resource(
            uri="resource://ace_prefix",
            name="ace_prefix",
            description="The ACE prefix and the host characters that never need encoding.",
        )
        async def get_ace_prefix() -> Dict[str, Any]:
            return await self._get_ace_prefix_impl()

    async def _get_punycode_parameters_impl(self) -> Dict[str, Any]:
        """Implementation to list the codec parameters."""
        return {
            "base": codec.BASE,
            "tmin": codec.TMIN,
            "tmax": codec.TMAX,
            "skew": codec.SKEW,
            "damp": codec.DAMP,
            "initial_bias": codec.INITIAL_BIAS,
            "initial_n": codec.INITIAL_N,
            "delimiter": codec.DELIMITER,
            "alphabet": codec.ALPHABET,
        }

    async def _get_ace_prefix_impl(self) -> Dict[str, Any]:
        """Implementation to describe the ACE prefix handling."""
        return {
            "prefix": ACE_PREFIX,
            "host_allowed_chars": "".join(sorted(HOST_ALLOWED_CHARS)),
        }
