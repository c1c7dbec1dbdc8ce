"""Application layer: interfaces, services, page state, and use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (store, auth provider, realtime).
"""
