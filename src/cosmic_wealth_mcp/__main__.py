#!/usr/bin/env python3
"""Entry point for cosmic-wealth-mcp server."""

from cosmic_wealth_mcp.server import run

if __name__ == "__main__":
    run()
