"""Business logic invoked by the API routes."""
