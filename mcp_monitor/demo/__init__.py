"""Demo tool server for mcp-monitor."""
