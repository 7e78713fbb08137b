"""
Punycode MCP Server - An MCP server for RFC 3492 Punycode and IDNA hostname conversion.
"""

import asyncio
import sys
from typing import Any

import yaml
from fastmcp import FastMCP
from fastmcp.utilities.logging import get_logger

from punycode_mcp_server.prompt_mixins import PromptRegistrationMixin
from punycode_mcp_server.resource_mixins import ResourceRegistrationMixin
from punycode_mcp_server.server_mixins import ServerLifecycleMixin
from punycode_mcp_server.tool_mixins import ToolRegistrationMixin

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = "config/config.yaml"


def load_config(config_path: str) -> dict[str, Any]:
    """Load the YAML configuration file.

    Missing, unreadable or invalid files yield an empty configuration so the
    server still starts with its defaults.

    Args:
        config_path: Path to the configuration file.

    Returns:
        dict[str, Any]: The parsed configuration.
    """
    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        logger.info("Config file %s not found, using default settings", config_path)
        return {}
    except (yaml.YAMLError, OSError) as e:
        logger.error("Error loading config: %s", e)
        return {}
    if not isinstance(config, dict):
        logger.warning("Config file %s does not contain a mapping, ignoring it", config_path)
        return {}
    return config


class PunycodeMCPServer(
    ToolRegistrationMixin,
    PromptRegistrationMixin,
    ResourceRegistrationMixin,
    ServerLifecycleMixin,
):
    """MCP Server implementation for Punycode and IDNA conversion.

    Uses mixin classes to separate concerns:
    - ToolRegistrationMixin: Registers conversion tools
    - PromptRegistrationMixin: Registers prompts
    - ResourceRegistrationMixin: Registers codec parameter resources
    - ServerLifecycleMixin: Manages server startup/shutdown and signals
    """

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH) -> None:
        """Initialize the Punycode MCP server.

        Args:
            config_path: Path to the configuration file.
                Defaults to "config/config.yaml"
        """
        self.config_path = config_path
        self.logger = get_logger(__name__)
        self.config = load_config(self.config_path)
        self.server = FastMCP(
            name="Punycode MCP Server",
            instructions=(
                "An MCP server that converts internationalized domain names and "
                "arbitrary Unicode text to and from RFC 3492 Punycode."
            ),
        )

        # Must be called after self.server and self.config are initialized
        self._register_all_components()

    def _register_all_components(self) -> None:
        """Register all tools, prompts, and resources with the server."""
        self.register_tools()
        self.register_tools_prompts()
        self.register_codec_resources()
        self.logger.debug(
            "Registered components with features %s", self.config.get("features", {})
        )


async def main(config_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Main entry point for the Punycode MCP server."""
    server = PunycodeMCPServer(config_path=config_path)
    try:
        await server.start()
    except KeyboardInterrupt:
        await server.stop()
    except (OSError, RuntimeError) as e:
        logger.error("Unexpected error: %s", e)
        await server.stop()
        sys.exit(1)


def run_server() -> None:
    """Run the server with proper asyncio event loop handling."""
    config_path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH
    loop = None
    try:
        if sys.platform == "win32":
            loop = asyncio.ProactorEventLoop()
        else:
            loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)

        loop.run_until_complete(main(config_path))
    except KeyboardInterrupt:
        if loop is not None:
            loop.run_until_complete(asyncio.sleep(0))
    finally:
        if loop is not None:
            loop.close()


if __name__ == "__main__":
    run_server()
