"""
schema_cursors – paging, filtering, sorting and searching over hypermedia
collections and in-memory sequences.

Import path convention::

    from schema_cursors.cursors import EndpointCursor, ValueCursor
    from schema_cursors.cursors.pagination import normalize, build_page_params
    from schema_cursors.adapters.http import HttpxSchemaAgent, StaticSchema
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
