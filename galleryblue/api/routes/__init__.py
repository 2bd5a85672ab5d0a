"""Connect RPC routers, one per service."""
