"""Tests for MCP resources."""

import json

import pytest
from fastmcp import Client, FastMCP

from opencontext.resources import (
    get_languages_resource,
    get_patterns_resource,
    get_weights_resource,
    register_resources,
)
from opencontext.search.tables import DEFAULT_TABLES, SearchTables, tables_from_mapping


class TestResourceContent:
    """Tests for the JSON bodies of each resource."""

    def test_languages(self):
        """Languages map to their extensions."""
        data = json.loads(get_languages_resource(DEFAULT_TABLES))
        assert data["typescript"] == [".ts", ".tsx", ".mts", ".cts"]
        assert data["python"] == [".py", ".pyi", ".pyw"]

    def test_patterns(self):
        """Patterns are grouped by purpose."""
        data = json.loads(get_patterns_resource(DEFAULT_TABLES))
        assert set(data) == {"exclude", "test", "config", "doc"}
        assert "**/node_modules/**" in data["exclude"]
        assert "*.test.*" in data["test"]

    def test_weights(self):
        """Weights use plain category names."""
        data = json.loads(get_weights_resource(DEFAULT_TABLES))
        assert data["filename"] == 25
        assert data["class"] == 15
        assert data["import"] == 10

    def test_reflects_tuned_tables(self):
        """Resources show the tables in effect, not the defaults."""
        tables = tables_from_mapping({"weights": {"filename": 40}, "languages": {"zig": [".zig"]}})
        assert json.loads(get_weights_resource(tables))["filename"] == 40
        assert json.loads(get_languages_resource(tables))["zig"] == [".zig"]

    def test_injected_tables(self):
        """Custom tables replace every pattern list."""
        tables = SearchTables(exclude_patterns=["*.gen"], doc_patterns=[])
        data = json.loads(get_patterns_resource(tables))
        assert data["exclude"] == ["*.gen"]
        assert data["doc"] == []


class TestRegisterResources:
    """Tests for resource registration on a FastMCP server."""

    @pytest.mark.asyncio
    async def test_resources_are_listed(self):
        """All three resources are registered under the opencontext scheme."""
        mcp = FastMCP(name="test")
        register_resources(mcp, DEFAULT_TABLES)

        async with Client(mcp) as client:
            resources = await client.list_resources()

        assert sorted(str(r.uri).rstrip("/") for r in resources) == [
            "opencontext://languages",
            "opencontext://patterns",
            "opencontext://weights",
        ]

    @pytest.mark.asyncio
    async def test_read_weights(self):
        """Reading a resource returns its JSON body."""
        mcp = FastMCP(name="test")
        register_resources(mcp, DEFAULT_TABLES)

        async with Client(mcp) as client:
            contents = await client.read_resource("opencontext://weights")

        assert json.loads(contents[0].text)["filename"] == 25
