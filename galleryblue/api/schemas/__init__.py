"""Connect JSON message schemas."""
