"""HTTP and WebSocket tests against the ASGI app."""
