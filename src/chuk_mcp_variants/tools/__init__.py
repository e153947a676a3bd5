"""
MCP tool implementations.

Tools are organized by domain:
- variants - Style document discovery, resolution and validation
"""

from chuk_mcp_variants.tools.variants import register_variant_tools

__all__ = [
    "register_variant_tools",
]
