"""Schema class for managing record types declared in the type DSL."""

from __future__ import annotations

from pathlib import Path

from textrecords.parsing import TypeParser
from textrecords.store import RecordStore
from textrecords.types import RecordType, RecordTypeRegistry


class Schema:
    """Parsed record type definitions."""

    def __init__(self, registry: RecordTypeRegistry) -> None:
        """Initialize a schema.

        Args:
            registry: Registry with all record type definitions.
        """
        self.registry = registry

    @classmethod
    def parse(cls, type_definitions: str) -> Schema:
        """Parse record type definitions and create a schema.

        Args:
            type_definitions: DSL string defining record types.

        Returns:
            A new Schema instance.
        """
        parser = TypeParser()
        return cls(parser.parse(type_definitions))

    @classmethod
    def load(cls, path: Path | str) -> Schema:
        """Parse record type definitions from a file."""
        return cls.parse(Path(path).read_text(encoding="utf-8"))

    def get_type(self, name: str) -> RecordType:
        """Get a record type by name.

        Raises:
            KeyError: If the type is not found.
        """
        return self.registry.get_or_raise(name)

    def list_types(self) -> list[str]:
        """List all registered type names."""
        return self.registry.list_types()

    def open_store(self, type_name: str, path: Path | str | None = None) -> RecordStore:
        """Create a store for a record type, loading path if given.

        A path that does not exist yet gives an empty store.
        """
        store = RecordStore(self.get_type(type_name))
        if path is not None:
            store.parse_file(path)
        return store
