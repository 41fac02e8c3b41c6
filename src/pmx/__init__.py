"""pmx - prompt profile management suite

Philosophy:
- Ruthless simplicity
- Brick architecture (self-contained modules)
- Plain files as the source of truth
- Fail fast with helpful guidance

pmx stores reusable system prompts ("profiles") as Markdown files, applies them
to coding agents, and serves them to MCP clients over stdio.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
