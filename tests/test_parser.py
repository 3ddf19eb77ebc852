"""Tests for the record type DSL parser."""

import pytest

from textrecords.parsing import TypeParser
from textrecords.parsing.type_lexer import TypeLexer
from textrecords.types import RecordType, ScalarType


class TestTypeLexer:
    """Tests for the type lexer."""

    def test_tokenize_record_type(self):
        """Test tokenizing a record type."""
        lexer = TypeLexer()
        lexer.build()

        tokens = lexer.tokenize("Person { name: string, id: integer = 7 }")
        token_types = [t.type for t in tokens]

        assert token_types == [
            "IDENTIFIER",
            "LBRACE",
            "IDENTIFIER",
            "COLON",
            "IDENTIFIER",
            "COMMA",
            "IDENTIFIER",
            "COLON",
            "IDENTIFIER",
            "EQUALS",
            "INTEGER",
            "RBRACE",
        ]

    def test_literals(self):
        """Test literal token values."""
        lexer = TypeLexer()
        lexer.build()

        tokens = lexer.tokenize('-12 2.5 -1e3 "a \\"b\\"" true false')
        assert [(t.type, t.value) for t in tokens] == [
            ("INTEGER", -12),
            ("FLOAT", 2.5),
            ("FLOAT", -1000.0),
            ("STRING", 'a "b"'),
            ("TRUE", "true"),
            ("FALSE", "false"),
        ]

    def test_comments_and_newlines_ignored(self):
        """Test that comments and newlines produce no tokens."""
        lexer = TypeLexer()
        lexer.build()

        tokens = lexer.tokenize("# a comment\nPerson { }\n")
        assert [t.type for t in tokens] == ["IDENTIFIER", "LBRACE", "RBRACE"]

    def test_illegal_character(self):
        """Test error on illegal character."""
        lexer = TypeLexer()
        lexer.build()

        with pytest.raises(SyntaxError):
            lexer.tokenize("Person { name @ string }")


class TestTypeParser:
    """Tests for the type parser."""

    def test_parse_simple_record_type(self):
        """Test parsing a record type with two fields."""
        parser = TypeParser()
        registry = parser.parse("""
        Person {
            name: string,
            id: integer
        }
        """)

        assert "Person" in registry
        record_type = registry.get("Person")
        assert isinstance(record_type, RecordType)
        assert record_type.field_names == ["name", "id"]
        assert record_type.get_field("id").scalar is ScalarType.INTEGER

    def test_type_name_aliases(self):
        """Test the short and long spellings of scalar types."""
        parser = TypeParser()
        registry = parser.parse(
            "T { a: str, b: int, c: double, d: bool, e: string, f: integer, g: float, h: boolean }"
        )

        scalars = [f.scalar for f in registry.get("T").fields]
        assert scalars == [
            ScalarType.STRING,
            ScalarType.INTEGER,
            ScalarType.FLOAT,
            ScalarType.BOOLEAN,
            ScalarType.STRING,
            ScalarType.INTEGER,
            ScalarType.FLOAT,
            ScalarType.BOOLEAN,
        ]

    def test_commas_optional_and_trailing(self):
        """Test fields separated by newlines and a trailing comma."""
        parser = TypeParser()
        registry = parser.parse("""
        Point {
            x: float
            y: float,
        }
        """)

        assert registry.get("Point").field_names == ["x", "y"]

    def test_defaults(self):
        """Test default values for each scalar type."""
        parser = TypeParser()
        registry = parser.parse("""
        Config {
            name: string = "main",
            retries: int = 3,
            ratio: float = 1,
            scale: float = 0.5,
            enabled: bool = true
        }
        """)

        record = registry.get("Config").new_record()
        assert record.name == "main"
        assert record.retries == 3
        assert record.ratio == 1.0 and isinstance(record.ratio, float)
        assert record.scale == 0.5
        assert record.enabled is True

    def test_fields_without_defaults_are_zero(self):
        """Test fields without a default take the scalar zero value."""
        parser = TypeParser()
        registry = parser.parse("Person { name: string, id: integer }")

        record = registry.get("Person").record_class()
        assert record.name == ""
        assert record.id == 0

    def test_multiple_types(self):
        """Test parsing several record types."""
        parser = TypeParser()
        registry = parser.parse("A { x: int }\nB { y: string }\nEmpty { }")

        assert registry.list_types() == ["A", "B", "Empty"]
        assert registry.get("Empty").fields == []

    def test_empty_input(self):
        """Test that empty input produces an empty registry."""
        parser = TypeParser()
        assert len(parser.parse("")) == 0
        assert len(parser.parse("# only a comment\n")) == 0

    def test_parser_reusable(self):
        """Test that each parse starts with a fresh registry."""
        parser = TypeParser()
        parser.parse("A { x: int }")
        registry = parser.parse("A { y: int }")
        assert registry.get("A").field_names == ["y"]

    def test_unknown_type(self):
        """Test error on an unknown field type."""
        parser = TypeParser()
        with pytest.raises(ValueError, match="Unknown type 'uuid'"):
            parser.parse("Person { id: uuid }")

    def test_duplicate_field(self):
        """Test error on a repeated field name."""
        parser = TypeParser()
        with pytest.raises(ValueError, match="Duplicate field"):
            parser.parse("Person { id: int, id: string }")

    def test_duplicate_type(self):
        """Test error on a repeated type name."""
        parser = TypeParser()
        with pytest.raises(ValueError, match="already defined"):
            parser.parse("A { x: int }\nA { y: int }")

    def test_reserved_field_name(self):
        """Test error on a field named after a Python keyword."""
        parser = TypeParser()
        with pytest.raises(ValueError, match="reserved"):
            parser.parse("A { class: string }")

    def test_ill_typed_default(self):
        """Test error on a default of the wrong type."""
        parser = TypeParser()
        with pytest.raises(ValueError, match="not a integer"):
            parser.parse('A { x: int = "seven" }')
        with pytest.raises(ValueError):
            parser.parse("A { x: string = 5 }")

    def test_syntax_error(self):
        """Test syntax errors report the line."""
        parser = TypeParser()
        with pytest.raises(SyntaxError, match="line 2"):
            parser.parse("A {\n x int\n}")

    def test_syntax_error_at_end(self):
        """Test syntax error on truncated input."""
        parser = TypeParser()
        with pytest.raises(SyntaxError, match="end of input"):
            parser.parse("A { x: int")
