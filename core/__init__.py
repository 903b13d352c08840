# =============================================================================
# core/__init__.py
# =============================================================================
# The tool service itself: schema descriptors, the registry and its
# invocation contract, result envelopes, the external call adapter, and the
# concrete productivity tools.
#
# Nothing in this package imports FastMCP or Google ADK.  The registry can
# be built and invoked from a plain asyncio program, which is exactly what
# the tests do.
# =============================================================================
