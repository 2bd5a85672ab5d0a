"""HTTP surface: Connect RPC routes, schemas and the FastAPI application."""
