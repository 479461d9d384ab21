"""Cosmic wealth MCP server."""
