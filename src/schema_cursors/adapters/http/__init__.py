"""HTTP adapter – httpx-backed agent and static link schema."""
from schema_cursors.adapters.http.agent import HttpxSchemaAgent, expand_href
from schema_cursors.adapters.http.schema import StaticSchema

__all__ = ["HttpxSchemaAgent", "StaticSchema", "expand_href"]
