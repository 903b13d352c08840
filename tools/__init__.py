# =============================================================================
# tools/__init__.py
# =============================================================================
# The transport layer.  mcp_server.py publishes the ToolRegistry built in
# core/catalog.py over MCP (FastMCP) and turns each MCP call into a
# ToolRegistry.invoke().
#
# WHAT THIS PACKAGE DOES NOT DO:
#   - define tools, schemas or envelopes (core/)
#   - decide which tool to call (the agent's job)
# =============================================================================
