#!/usr/bin/env python3
"""
Example: Using the Variant System.

This demonstrates how style documents turn variant selections into
per-slot class strings. Documents are data: the library ships a few,
and you copy them into your project to make them your own.

Usage:
    python examples/use_variants.py
"""

import tempfile
from pathlib import Path

from chuk_mcp_variants import create_variants, merge_classes
from chuk_mcp_variants.styles import StyleDocumentLoader
from chuk_mcp_variants.variants import ValidationSeverity, validate_document


def main() -> None:
    """Demonstrate the variant system."""
    print("CHUK Variants Demo")
    print("=" * 40)
    print()

    # Class merging on its own
    print("Class merging:")
    for classes in ["bg-red-500 px-2 bg-blue-500", "px-2 py-1 p-4", "p-4 px-2 hover:p-1"]:
        print(f"  {classes!r:32} -> {merge_classes(classes)!r}")
    print()

    # Load documents from the library
    library_path = Path(__file__).parent.parent / "src/chuk_mcp_variants/styles/library"

    with tempfile.TemporaryDirectory() as tmp:
        loader = StyleDocumentLoader(library_path=library_path, project_path=Path(tmp))

        # List available documents
        print("Available documents:")
        for meta in loader.list_documents():
            extends = f" (extends {', '.join(meta.extends)})" if meta.extends else ""
            print(f"  {meta.name}{extends}: {meta.description}")
            print(f"    Variants: {', '.join(meta.variants)}")
        print()

        # Resolve the button
        button = loader.get_component("button")
        print("button() with defaults:")
        for slot, classes in button().items():
            print(f"  {slot:13} {classes}")
        print()

        print("button(color='error', variant='outline', size='lg', block=True):")
        resolved = button(color="error", variant="outline", size="lg", block=True)
        for slot, classes in resolved.items():
            print(f"  {slot:13} {classes}")
        print()

        # Per-slot renderers
        print("Slot renderers:")
        slots = button.slots(size="sm", loading=True)
        print(f"  leadingIcon: {slots['leadingIcon']()}")
        print(f"  label + extra: {slots['label'](class_='font-semibold')}")
        print()

        # Where classes come from
        print("Explaining button(color='neutral').base:")
        for fragment in button.explain(color="neutral")["base"]:
            print(f"  {fragment.stage.value:9} {fragment.source:22} {' '.join(fragment.tokens)}")
        print()

        # Extension in code
        print("Extending in code:")
        pill = create_variants(
            {"slots": {"base": "rounded-full"}, "variants": {"size": {"md": "px-4"}}},
            extend=button,
        )
        print(f"  pill().base: {pill()['base']}")
        print()

        # Validation
        print("Validation:")
        draft = create_variants(
            {
                "variants": {"size": {"sm": "text-sm", "md": "text-base"}},
                "compoundVariants": [{"size": "lg", "class": "text-lg"}],
                "defaultVariants": {"size": "medium"},
            }
        )
        result = validate_document(draft.document)
        for issue in result.issues:
            if issue.severity != ValidationSeverity.INFO:
                print(f"  {issue}")
        print()

        # Copying documents for customization
        print("Copying document to project for customization:")
        copied_path = loader.copy_to_project("badge")
        if copied_path:
            print(f"  Copied to: {copied_path}")
            print("  You can now edit this file to customize the document!")
        print()

        print("Done! Use style documents to keep component classes declarative.")


if __name__ == "__main__":
    main()
