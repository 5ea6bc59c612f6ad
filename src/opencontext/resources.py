"""MCP Resources for opencontext.

Resources expose the lookup tables driving the search as read-only JSON.
"""

import json

from opencontext.search.tables import SearchTables


def get_languages_resource(tables: SearchTables) -> str:
    """Language name to extensions table."""
    return json.dumps(tables.languages, indent=2)


def get_patterns_resource(tables: SearchTables) -> str:
    """Default exclusions and the test/config/doc classification patterns."""
    return json.dumps(
        {
            "exclude": tables.exclude_patterns,
            "test": tables.test_patterns,
            "config": tables.config_patterns,
            "doc": tables.doc_patterns,
        },
        indent=2,
    )


def get_weights_resource(tables: SearchTables) -> str:
    """Scoring weight per signal category."""
    return json.dumps(tables.weights.to_dict(), indent=2)


def register_resources(mcp, tables: SearchTables):
    """Register all resources with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        tables: Tables in effect for this server
    """

    @mcp.resource("opencontext://languages", mime_type="application/json")
    def languages():
        """Languages recognised in queries and file extensions."""
        return get_languages_resource(tables)

    @mcp.resource("opencontext://patterns", mime_type="application/json")
    def patterns():
        """Glob patterns used to exclude and classify files."""
        return get_patterns_resource(tables)

    @mcp.resource("opencontext://weights", mime_type="application/json")
    def weights():
        """Relevance weight of each scoring signal."""
        return get_weights_resource(tables)
