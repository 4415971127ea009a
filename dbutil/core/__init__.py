"""Core: configuration, connections, statements, transactions."""
