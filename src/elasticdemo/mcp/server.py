"""elasticdemo MCP server entrypoint using FastMCP.

Exposes the search layer as tools.
Run with:
  - elasticdemo-mcp
  - or: python -m elasticdemo.mcp.server (ensure PYTHONPATH includes ./src)
"""
from __future__ import annotations

import asyncio
from typing import Optional

from fastmcp import FastMCP

from elasticdemo.config import Settings, load_settings
from elasticdemo.log import configure_logging
from elasticdemo.mcp.tools import register_search_tools
from elasticdemo.search.store import DocumentStore


class AppState:
    """Application state shared by MCP tools."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.store: Optional[DocumentStore] = None

    def init_store(self) -> None:
        """Create the document store from configuration."""
        cfg = self.settings.elasticsearch
        if cfg.uri:
            self.store = DocumentStore.from_config(cfg)
        else:
            self.store = None

    async def close(self) -> None:
        """Release the store's connection pool."""
        if self.store is not None:
            store, self.store = self.store, None
            await store.close()


# Global state and server instance
_state: Optional[AppState] = None
mcp = FastMCP("elasticdemo MCP Server")


# ----- Tools -----

@mcp.tool
def health() -> str:
    """Simple health check tool."""
    return "ok"


# ----- Entrypoint -----

async def serve(state: AppState) -> None:
    """Run the server on the configured transport, closing the store on exit."""
    app = state.settings.app
    try:
        # Choose transport based on configuration: stdio (default), http, or sse
        if app.transport in ("http", "sse"):
            await mcp.run_async(transport=app.transport, host=app.host, port=app.port)
        else:
            await mcp.run_async()
    finally:
        await state.close()


def main() -> None:
    """Initialize state and run the MCP server."""
    global _state
    settings = load_settings()
    configure_logging(settings.app.log_level)
    _state = AppState(settings)
    _state.init_store()
    register_search_tools(mcp, get_state=lambda: _state)
    asyncio.run(serve(_state))


if __name__ == "__main__":  # pragma: no cover
    main()
