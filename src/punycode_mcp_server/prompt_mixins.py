"""
Prompt Mixin classes for PunycodeMCPServer to separate concerns.
"""

from typing import Any

from punycode_mcp_server.labels import ACE_PREFIX


class PromptRegistrationMixin:
    """Mixin for registering prompts with the MCP server.

    Note: This mixin assumes the class has 'server' (FastMCP) and 'config' (dict)
    attributes available when register_tools_prompts() is called.
    """

    # Type hints for attributes provided by the host class
    server: Any  # FastMCP instance
    config: dict[str, Any]  # Configuration dictionary

    def register_tools_prompts(self) -> None:
        """Register prompts for tools with the server."""

        @self.server.prompt(
            name="convert_hostname",
            description="Convert an internationalized hostname to its punycode form.",
            tags=set(("idn", "punycode", "converter")),
            enabled=True,
        )
        def convert_hostname(hostname: str) -> str:
            """Convert an internationalized hostname to its punycode form."""
            return (
                f"Convert {hostname} to its ASCII compatible form using the idna_encode"
                " tool provided by the Punycode MCP Server."
            )

        @self.server.prompt(
            name="explain_ace_label",
            description="Explain what an xn-- label of a hostname stands for.",
            tags=set(("idn", "punycode", "decode")),
            enabled=True,
        )
        def explain_ace_label(hostname: str) -> str:
            """Explain the ACE labels of a hostname."""
            return (
                f"Decode {hostname} using the idna_decode tool provided by the Punycode"
                f" MCP Server and explain which labels carried the `{ACE_PREFIX}` prefix"
                " and what Unicode text they represent."
            )

        @self.server.prompt(
            name="check_hostname",
            description="Check every label of a hostname and validate its ACE form.",
            tags=set(("idn", "validation", "FQDN")),
            enabled=self.config.get("features", {}).get("hostname_validation", False),
        )
        def check_hostname(hostname: str) -> str:
            """Check every label of a hostname and validate its ACE form."""
            return (
                f"Run the hostname_check tool on {hostname} and summarize which labels"
                " needed punycode and whether the resulting name is a valid FQDN."
            )
