"""Testing fakes – in-memory doubles for the agent port."""
from schema_cursors.testing.fakes.agent import InMemoryCollectionAgent, meta_envelope

__all__ = ["InMemoryCollectionAgent", "meta_envelope"]
