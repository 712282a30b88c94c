"""Observability – structured logging and cursor lifecycle events."""
