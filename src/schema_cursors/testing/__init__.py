"""Testing – in-memory doubles for the cursor ports."""
