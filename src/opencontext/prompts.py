"""MCP prompts for opencontext.

Prompts are templates that steer an agent towards locating files with
find_files before reading whole directories.
"""

from fastmcp import FastMCP


def build_locate_files_prompt(task: str) -> str:
    """Build the instructions for locating the files relevant to a task."""
    task = task.strip() or "the current task"
    return (
        f"# Locate files for: {task}\n\n"
        "Before reading any source files, call the `find_files` tool to find "
        "the handful of files most relevant to this task.\n\n"
        "## How to query\n\n"
        "- Use 2-4 distinctive words from the task (names of functions, "
        "classes, modules or concepts), e.g. `auth middleware`.\n"
        '- Put multi-word names in double quotes to match them exactly, e.g. `"user service"`.\n'
        "- Add `.ts`, `.py` or a language name to prefer that file type.\n"
        "- Mention tests, config or docs (or set `include_tests`, "
        "`include_configs`, `include_docs`) when those files matter.\n"
        "- Set `line_preview` to see the matching lines without opening the file.\n\n"
        "## Then\n\n"
        "1. Read the top results in score order; scores are 0-100.\n"
        "2. If nothing relevant comes back, rephrase with synonyms or lower `min_score`.\n"
        "3. Use `parse_query` if the results look off, to see how the query was interpreted.\n"
    )


def register_prompts(mcp: FastMCP) -> None:
    """Register all prompts with the FastMCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.prompt()
    def locate_files(task: str) -> str:
        """Guide the agent to find relevant files before reading code.

        Args:
            task: Description of what the agent is working on
        """
        return build_locate_files_prompt(task)
