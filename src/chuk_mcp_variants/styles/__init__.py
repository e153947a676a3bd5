"""
Style documents on disk - a built-in library plus project overrides.

Documents are plain YAML. The loader resolves `extends` into extension
chains the variant engine merges.
"""

from chuk_mcp_variants.styles.loader import LIBRARY_PREFIX, StyleDocumentLoader

__all__ = [
    "LIBRARY_PREFIX",
    "StyleDocumentLoader",
]
