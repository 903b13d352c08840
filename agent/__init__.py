# =============================================================================
# agent/__init__.py
# =============================================================================
# A demo caller for the tool service: a Google ADK agent that launches
# tools/mcp_server.py over stdio, discovers the catalog and decides which
# tool to invoke for each request.
#
# The agent holds no tool logic.  Everything it can do comes from the
# catalog the server advertises.
# =============================================================================
