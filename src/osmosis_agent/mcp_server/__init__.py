"""MCP stdio server for the Osmosis agent toolkit."""

from osmosis_agent.mcp_server.server import create_server

__all__ = ["create_server"]
