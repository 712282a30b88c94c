"""Adapters – concrete agents for the cursor ports."""
