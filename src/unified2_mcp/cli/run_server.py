from __future__ import annotations

from unified2_mcp.core.config import Settings
from unified2_mcp.core.server import Unified2MCPServer
from unified2_mcp.utils.logging import configure_logging


def main() -> None:
    """
    Start the MCP server over stdio.

    Capabilities come from U2_CAPABILITIES, a JSON list of import strings.
    Without it both built in capabilities are loaded.

    Example:
      export U2_CAPABILITIES='[
        "unified2_mcp.capabilities.file_tail.capability:build_capability"
      ]'
      export U2_LOG_LEVEL=debug
      unified2-mcp
    """
    settings = Settings()
    configure_logging(settings.log_level)

    server = Unified2MCPServer(settings=settings)
    server.run()


if __name__ == "__main__":
    main()
