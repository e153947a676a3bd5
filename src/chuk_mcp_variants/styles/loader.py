"""
Document loader - discovers and loads style documents.

Documents can come from:
1. Built-in library (shipped with package)
2. Project styles (user's project/styles directory)

A project document replaces the library document of the same name. To
build on it instead, the project document extends it explicitly:

    extends: library:button
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from chuk_mcp_variants.constants import DOCUMENT_SUFFIX, ErrorMessages
from chuk_mcp_variants.errors import ConfigError
from chuk_mcp_variants.models.config import EngineConfig
from chuk_mcp_variants.models.document import DocumentMetadata, StyleDocument
from chuk_mcp_variants.models.parser import parse_document
from chuk_mcp_variants.variants.component import VariantComponent

logger = logging.getLogger(__name__)

# Reference prefix forcing a library lookup
LIBRARY_PREFIX = "library:"


class StyleDocumentLoader:
    """
    Discovers and loads style documents.

    Documents are loaded from YAML files in the library and project
    directories. Project documents override library documents with the
    same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the document loader.

        Args:
            library_path: Path to built-in document library
            project_path: Path to project styles directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, StyleDocument] = {}

    def list_documents(self) -> list[DocumentMetadata]:
        """
        List all available documents.

        Returns documents from both library and project, with project
        documents taking precedence. Unreadable files are skipped.
        """
        documents: dict[str, DocumentMetadata] = {}

        for directory in (self.library_path, self.project_path):
            if not directory or not directory.exists():
                continue
            for path in sorted(directory.glob(f"*{DOCUMENT_SUFFIX}")):
                try:
                    document = self._load_document_file(path)
                except ConfigError as e:
                    logger.warning("Skipping style document %s: %s", path, e)
                    continue
                documents[path.stem] = DocumentMetadata.from_document(document, path.stem)

        return sorted(documents.values(), key=lambda m: m.name)

    def get_document(self, name: str) -> StyleDocument | None:
        """
        Get a document by name.

        Project documents take precedence over library documents; a
        "library:" prefix skips the project.

        Args:
            name: Document name

        Returns:
            StyleDocument if found, None otherwise

        Raises:
            ConfigError: If the file exists but is malformed
        """
        if name in self._cache:
            return self._cache[name]

        path = self._find(name)
        if path is None:
            return None

        document = self._load_document_file(path)
        self._cache[name] = document
        return document

    def get_chain(self, name: str) -> list[StyleDocument]:
        """
        Get the extension chain of a document, ancestors first.

        Args:
            name: Document name

        Returns:
            Documents from least to most specific

        Raises:
            ValueError: If the document or an ancestor doesn't exist
            ConfigError: On malformed files or extension cycles
        """
        chain: list[StyleDocument] = []
        self._collect_chain(name, [], chain)
        return chain

    def get_component(self, name: str, config: EngineConfig | None = None) -> VariantComponent:
        """
        Build a component from a document's extension chain.

        Args:
            name: Document name
            config: Engine options

        Returns:
            The merged component
        """
        return VariantComponent(self.get_chain(name), config)

    def copy_to_project(self, name: str) -> Path | None:
        """
        Copy a library document to the project for customization.

        Args:
            name: Document name

        Returns:
            Path to copied file, or None if not found
        """
        if not self.project_path:
            raise ValueError("No project path configured")

        # Find in library
        library_file = self.library_path / f"{name}{DOCUMENT_SUFFIX}"
        if not library_file.exists():
            return None

        # Create project styles directory
        self.project_path.mkdir(parents=True, exist_ok=True)

        # Copy file
        dest_file = self.project_path / f"{name}{DOCUMENT_SUFFIX}"
        if dest_file.exists():
            raise ValueError(f"Style document already exists in project: {name}")

        dest_file.write_text(library_file.read_text())

        # Invalidate cache
        self._cache.pop(name, None)

        return dest_file

    def save_document(self, name: str, data: dict[str, Any]) -> Path:
        """
        Write a document to the project directory.

        The data is parsed first, so malformed documents are never saved.

        Args:
            name: Document name
            data: Raw document

        Returns:
            Path to the written file
        """
        if not self.project_path:
            raise ValueError("No project path configured")

        parse_document(data)
        self.project_path.mkdir(parents=True, exist_ok=True)
        dest_file = self.project_path / f"{name}{DOCUMENT_SUFFIX}"
        dest_file.write_text(yaml.safe_dump(data, sort_keys=False))
        self._cache.pop(name, None)
        return dest_file

    def clear_cache(self) -> None:
        """Clear the document cache."""
        self._cache.clear()

    def _find(self, name: str) -> Path | None:
        """Locate a document file, project first."""
        if name.startswith(LIBRARY_PREFIX):
            library_file = self.library_path / f"{name[len(LIBRARY_PREFIX):]}{DOCUMENT_SUFFIX}"
            return library_file if library_file.exists() else None

        if self.project_path:
            project_file = self.project_path / f"{name}{DOCUMENT_SUFFIX}"
            if project_file.exists():
                return project_file

        library_file = self.library_path / f"{name}{DOCUMENT_SUFFIX}"
        if library_file.exists():
            return library_file
        return None

    def _collect_chain(self, name: str, stack: list[str], chain: list[StyleDocument]) -> None:
        """Depth-first walk over extends, ancestors appended first."""
        if name in stack:
            cycle = " -> ".join([*stack, name])
            raise ConfigError(ErrorMessages.EXTENDS_CYCLE.format(chain=cycle), path="extends")

        document = self.get_document(name)
        if document is None:
            raise ValueError(ErrorMessages.DOCUMENT_NOT_FOUND.format(name=name))

        # Shared ancestors (diamond extends) are merged once
        if any(seen is document for seen in chain):
            return
        for parent in document.extends:
            self._collect_chain(parent, [*stack, name], chain)
        chain.append(document)

    def _load_document_file(self, path: Path) -> StyleDocument:
        """Load a document from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML: {e}", path=path.name) from e

        try:
            return parse_document(data)
        except ConfigError as e:
            where = f"{path.name}:{e.path}" if e.path else path.name
            raise ConfigError(e.reason, path=where) from e
