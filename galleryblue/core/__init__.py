"""Core infrastructure: settings, database, security, caller identity."""
