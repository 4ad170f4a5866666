"""
reviewer_mcp - MCP tool server for AI-assisted review workflows.

Tools: generate_spec, review_spec, review_code, run_tests, run_linter,
notify, music, memory.

Run with `reviewer-mcp serve` (stdio transport).
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
