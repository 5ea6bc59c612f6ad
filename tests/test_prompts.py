"""Tests for MCP prompts."""

import pytest
from fastmcp import Client, FastMCP

from opencontext.prompts import build_locate_files_prompt, register_prompts


class TestLocateFilesPrompt:
    """Tests for the locate_files prompt text."""

    def test_includes_task(self):
        """The task appears in the heading."""
        prompt = build_locate_files_prompt("fix the login redirect")
        assert prompt.startswith("# Locate files for: fix the login redirect")

    def test_mentions_tools(self):
        """The prompt points the agent at both tools and line previews."""
        prompt = build_locate_files_prompt("anything")
        assert "`find_files`" in prompt
        assert "`parse_query`" in prompt
        assert "`line_preview`" in prompt

    def test_blank_task(self):
        """A blank task falls back to a generic heading."""
        assert build_locate_files_prompt("   ").startswith("# Locate files for: the current task")


class TestRegisterPrompts:
    """Tests for prompt registration on a FastMCP server."""

    @pytest.mark.asyncio
    async def test_prompt_is_listed_and_rendered(self):
        """locate_files is registered and renders the task."""
        mcp = FastMCP(name="test")
        register_prompts(mcp)

        async with Client(mcp) as client:
            prompts = await client.list_prompts()
            result = await client.get_prompt("locate_files", {"task": "add rate limiting"})

        assert [p.name for p in prompts] == ["locate_files"]
        assert "add rate limiting" in result.messages[0].content.text
