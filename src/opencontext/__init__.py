"""
opencontext - find the files that matter before reading them.

Ranks the files of a directory tree by relevance to a free-text query, with
no index to build or keep fresh: every search is a fresh scan.

Stack:
- Python + FastMCP (MCP server exposing find_files)
- Regex heuristics over raw text (no AST parsing)
- YAML tuning file for weights and lookup tables
"""

__version__ = "0.1.0"
