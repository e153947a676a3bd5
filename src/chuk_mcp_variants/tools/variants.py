"""
Variant tools - MCP tools for resolving style documents.

Tools for listing documents, resolving variant selections to class
strings, explaining resolutions, and validating documents.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_variants.classes import merge_classes
from chuk_mcp_variants.constants import ErrorMessages
from chuk_mcp_variants.errors import ConfigError
from chuk_mcp_variants.styles import StyleDocumentLoader
from chuk_mcp_variants.variants import (
    ValidationSeverity,
    effective_selections,
    validate_document,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _not_found(name: str) -> str:
    return json.dumps(
        {"status": "error", "message": ErrorMessages.DOCUMENT_NOT_FOUND.format(name=name)}
    )


def register_variant_tools(
    mcp: ChukMCPServer,
    loader: StyleDocumentLoader,
) -> dict[str, Any]:
    """
    Register style variant tools with the MCP server.

    Args:
        mcp: The MCP server instance
        loader: The style document loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def variants_list_documents() -> str:
        """
        List available style documents.

        Returns all documents from the library and project with
        their slots and variants.

        Returns:
            JSON string with list of document summaries

        Example:
            variants_list_documents()
        """
        try:
            documents = loader.list_documents()
            return json.dumps(
                {
                    "status": "success",
                    "documents": [
                        {
                            "name": d.name,
                            "description": d.description,
                            "slots": d.slots,
                            "variants": d.variants,
                            "extends": d.extends,
                        }
                        for d in documents
                    ],
                    "count": len(documents),
                }
            )
        except Exception as e:
            logger.exception("Failed to list style documents")
            return json.dumps({"status": "error", "message": str(e)})

    tools["variants_list_documents"] = variants_list_documents

    @mcp.tool  # type: ignore[arg-type]
    async def variants_describe_document(name: str) -> str:
        """
        Get the merged definition of a style document.

        Resolves the document's extension chain and returns the merged
        slots, variants, compound rules and defaults.

        Args:
            name: Document name (prefix with 'library:' to skip project overrides)

        Returns:
            JSON string with the merged document

        Example:
            variants_describe_document(name="button")
        """
        try:
            if loader.get_document(name) is None:
                return _not_found(name)

            component = loader.get_component(name)
            document = component.document
            return json.dumps(
                {
                    "status": "success",
                    "document": {
                        "name": document.name or name,
                        "description": document.description,
                        "chain": [layer.name for layer in loader.get_chain(name)],
                        "slots": document.slot_names,
                        "boolean_variants": sorted(document.boolean_variants),
                        "definition": document.to_dict(),
                    },
                }
            )
        except ConfigError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to describe style document")
            return json.dumps({"status": "error", "message": str(e)})

    tools["variants_describe_document"] = variants_describe_document

    @mcp.tool  # type: ignore[arg-type]
    async def variants_resolve(
        name: str,
        selections: dict[str, Any] | None = None,
        slot_overrides: dict[str, Any] | None = None,
    ) -> str:
        """
        Resolve variant selections to class strings.

        Unselected variants fall back to the document's defaults.
        Unknown variants and values are ignored.

        Args:
            name: Document name
            selections: Variant name to value (booleans allowed); "class"
                adds classes to the base slot
            slot_overrides: Slot name to extra classes, applied last

        Returns:
            JSON string with one class string per slot

        Example:
            variants_resolve(name="button", selections={"size": "sm", "block": true})
        """
        try:
            if loader.get_document(name) is None:
                return _not_found(name)

            component = loader.get_component(name)
            classes = component(selections, overrides=slot_overrides)
            return json.dumps(
                {
                    "status": "success",
                    "name": name,
                    "selections": effective_selections(component.document, selections),
                    "classes": classes,
                }
            )
        except ConfigError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to resolve style document")
            return json.dumps({"status": "error", "message": str(e)})

    tools["variants_resolve"] = variants_resolve

    @mcp.tool  # type: ignore[arg-type]
    async def variants_explain(
        name: str,
        selections: dict[str, Any] | None = None,
    ) -> str:
        """
        Explain where each slot's classes come from.

        Lists the fragments every slot collected, in application order,
        next to the deduplicated result.

        Args:
            name: Document name
            selections: Variant name to value

        Returns:
            JSON string with per-slot fragments and final classes

        Example:
            variants_explain(name="button", selections={"color": "danger"})
        """
        try:
            if loader.get_document(name) is None:
                return _not_found(name)

            component = loader.get_component(name)
            matched = component.explain(selections)
            classes = component(selections)
            return json.dumps(
                {
                    "status": "success",
                    "name": name,
                    "slots": {
                        slot: {
                            "fragments": [
                                {
                                    "stage": f.stage.value,
                                    "source": f.source,
                                    "classes": " ".join(f.tokens),
                                }
                                for f in fragments
                            ],
                            "result": classes.get(slot, ""),
                        }
                        for slot, fragments in matched.items()
                    },
                }
            )
        except ConfigError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to explain style document")
            return json.dumps({"status": "error", "message": str(e)})

    tools["variants_explain"] = variants_explain

    @mcp.tool  # type: ignore[arg-type]
    async def variants_validate_document(name: str) -> str:
        """
        Validate a style document.

        Checks defaults and compound rules against the declared variants
        and reports rules that can never fire. Malformed documents are
        reported as errors.

        Args:
            name: Document name

        Returns:
            JSON string with validation results

        Example:
            variants_validate_document(name="button")
        """
        try:
            if loader.get_document(name) is None:
                return _not_found(name)

            result = validate_document(loader.get_component(name).document)
            return json.dumps(
                {
                    "status": "success",
                    "valid": result.is_valid,
                    "errors": [
                        {"code": i.code, "message": i.message, "location": i.location}
                        for i in result.errors
                    ],
                    "warnings": [
                        {"code": i.code, "message": i.message, "location": i.location}
                        for i in result.warnings
                    ],
                    "info": [
                        {"code": i.code, "message": i.message, "location": i.location}
                        for i in result.issues
                        if i.severity == ValidationSeverity.INFO
                    ],
                }
            )
        except ConfigError as e:
            return json.dumps(
                {
                    "status": "success",
                    "valid": False,
                    "errors": [{"code": "CONFIG_ERROR", "message": str(e), "location": e.path}],
                    "warnings": [],
                    "info": [],
                }
            )
        except Exception as e:
            logger.exception("Failed to validate style document")
            return json.dumps({"status": "error", "message": str(e)})

    tools["variants_validate_document"] = variants_validate_document

    @mcp.tool  # type: ignore[arg-type]
    async def variants_merge_classes(classes: str | list[str]) -> str:
        """
        Deduplicate conflicting utility classes.

        Later classes win: "px-2 px-4" becomes "px-4".

        Args:
            classes: Class string or list of class strings

        Returns:
            JSON string with the merged class string

        Example:
            variants_merge_classes(classes="bg-red-500 px-2 bg-blue-500")
        """
        try:
            return json.dumps({"status": "success", "classes": merge_classes(classes)})
        except Exception as e:
            logger.exception("Failed to merge classes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["variants_merge_classes"] = variants_merge_classes

    @mcp.tool  # type: ignore[arg-type]
    async def variants_copy_document_to_project(name: str) -> str:
        """
        Copy a library document to the project for customization.

        Args:
            name: Document name

        Returns:
            JSON string with path to copied document

        Example:
            variants_copy_document_to_project(name="button")
        """
        try:
            path = loader.copy_to_project(name)
            if path is None:
                return _not_found(name)

            return json.dumps(
                {
                    "status": "success",
                    "message": "Style document copied to project",
                    "path": str(path),
                    "hint": "You can now customize this document by editing the YAML file",
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to copy style document")
            return json.dumps({"status": "error", "message": str(e)})

    tools["variants_copy_document_to_project"] = variants_copy_document_to_project

    return tools
