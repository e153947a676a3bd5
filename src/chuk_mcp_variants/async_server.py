#!/usr/bin/env python3
"""
Async Variants MCP Server using chuk-mcp-server

This server provides MCP tools for resolving component style variants.
Style documents are plain YAML, inspired by shadcn/ui - copy a library
document into your project and you own it.

The server provides tools for:
- Discovering style documents (library and project)
- Resolving variant selections to per-slot class strings
- Explaining which rules contributed each class
- Validating documents and merging class lists
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_variants.constants import STYLES_DIR_ENV
from chuk_mcp_variants.styles import StyleDocumentLoader
from chuk_mcp_variants.tools import register_variant_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-variants")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
STYLES_DIR = Path(os.environ.get(STYLES_DIR_ENV, BASE_PATH / "styles"))
STYLES_LIBRARY_PATH = Path(__file__).parent / "styles" / "library"

# Create loader
style_loader = StyleDocumentLoader(
    library_path=STYLES_LIBRARY_PATH,
    project_path=STYLES_DIR,
)

# Register all tools
variant_tools = register_variant_tools(mcp, style_loader)

# Export tool functions for direct access
variants_list_documents = variant_tools["variants_list_documents"]
variants_describe_document = variant_tools["variants_describe_document"]
variants_resolve = variant_tools["variants_resolve"]
variants_explain = variant_tools["variants_explain"]
variants_validate_document = variant_tools["variants_validate_document"]
variants_merge_classes = variant_tools["variants_merge_classes"]
variants_copy_document_to_project = variant_tools["variants_copy_document_to_project"]

logger.info("CHUK Variants MCP Server initialized")
logger.info(f"  Library path: {STYLES_LIBRARY_PATH}")
logger.info(f"  Styles dir: {STYLES_DIR}")
