"""
Server Lifecycle Mixin classes for PunycodeMCPServer to separate concerns.
"""

import asyncio
import signal
import sys
from typing import Any

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_TRANSPORT = "http"
SHUTDOWN_TIMEOUT = 5.0


def shutdown_signals() -> tuple[signal.Signals, ...]:
    """Return the signals that trigger a graceful shutdown on this platform."""
    if sys.platform == "win32":
        return (signal.SIGINT, signal.SIGBREAK)
    return (signal.SIGINT, signal.SIGTERM)


class ServerLifecycleMixin:
    """Mixin for server lifecycle management (signals, startup, shutdown).

    Note: This mixin assumes the class has 'server' (FastMCP), 'config' (dict)
    and 'logger' attributes available when lifecycle methods are called.
    """

    # Type hints for attributes provided by the host class
    server: Any  # FastMCP instance
    config: dict[str, Any]  # Configuration dictionary
    logger: Any  # Logger instance

    def setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""
        for sig in shutdown_signals():
            try:
                asyncio.get_running_loop().add_signal_handler(
                    sig, lambda s=sig: asyncio.create_task(self._signal_handler(s))
                )
            except NotImplementedError:
                signal.signal(sig, lambda s, f: asyncio.create_task(self._signal_handler(s)))

    def remove_signal_handlers(self) -> None:
        """Remove the handlers installed by setup_signal_handlers()."""
        for sig in shutdown_signals():
            try:
                asyncio.get_running_loop().remove_signal_handler(sig)
            except (NotImplementedError, ValueError, RuntimeError):
                pass

    async def _signal_handler(self, sig: int) -> None:
        """Handle shutdown signals.

        Args:
            sig: Signal number that triggered the handler
        """
        self.logger.info("Received shutdown signal %s", signal.Signals(sig).name)
        await self.stop()

    async def start(self, host: str | None = None, port: int | None = None) -> None:
        """Start the MCP server.

        Host, port and transport default to the `server` section of the
        configuration. The `stdio` transport ignores host and port.

        Args:
            host: The host to bind to. Defaults to "127.0.0.1"
            port: The port to listen on. Defaults to 3000
        """
        server_cfg = self.config.get("server", {})
        host = host or server_cfg.get("host", DEFAULT_HOST)
        port = port or int(server_cfg.get("port", DEFAULT_PORT))
        transport = server_cfg.get("transport", DEFAULT_TRANSPORT)

        self.setup_signal_handlers()
        try:
            if transport == "stdio":
                self.logger.info("Starting Punycode MCP Server on stdio")
                await self.server.run_async(transport="stdio")
            else:
                self.logger.info("Starting Punycode MCP Server on %s:%d (%s)", host, port, transport)
                await self.server.run_async(transport=transport, host=host, port=port)
        except (OSError, RuntimeError) as e:
            self.logger.error("Error starting server: %s", e)
            await self.stop()
            raise
        except KeyboardInterrupt:
            self.logger.info("Received keyboard interrupt")
            await self.stop()

    async def _cancel_pending_tasks(self) -> None:
        """Cancel every task on the loop except the current one and wait for them."""
        current = asyncio.current_task()
        pending = [t for t in asyncio.all_tasks() if t is not current]
        if not pending:
            return

        self.logger.debug("Cancelling %d pending tasks", len(pending))
        for task in pending:
            task.cancel()
        try:
            await asyncio.wait_for(
                asyncio.gather(*pending, return_exceptions=True),
                timeout=SHUTDOWN_TIMEOUT,
            )
        except asyncio.TimeoutError:
            self.logger.warning("Timeout waiting for tasks to stop")

    async def stop(self) -> None:
        """Stop the MCP server gracefully."""
        self.logger.info("Shutting down Punycode MCP Server...")
        if hasattr(self, "server"):
            try:
                await self._cancel_pending_tasks()
            except Exception as e:
                self.logger.error("Error during server shutdown: %s", e)

        self.remove_signal_handlers()
        self.logger.info("Punycode MCP Server stopped")
