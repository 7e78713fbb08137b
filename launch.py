"""Launch script for the Punycode MCP Server.

This can be used as:
- Direct execution: python launch.py [config.yaml]
- Docker entrypoint: ENTRYPOINT ["python", "launch.py"]
- Package CLI: punycode-mcp-server (after installation)
"""

import os
import sys

# Add src directory to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from punycode_mcp_server.server import run_server

if __name__ == "__main__":
    run_server()
