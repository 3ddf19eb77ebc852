"""Parser for the record type definition DSL.

Example::

    # people.types
    Person {
        name: string,
        id: integer = 0,
        active: bool = true
    }

Commas between fields are optional and a trailing comma is allowed.
"""

from __future__ import annotations

import keyword
from dataclasses import dataclass, field
from typing import Any

import ply.yacc as yacc

from textrecords.parsing.type_lexer import TypeLexer
from textrecords.types import (
    SCALAR_TYPE_NAMES,
    FieldDefinition,
    RecordTypeRegistry,
    ScalarType,
    make_record_type,
)


@dataclass
class FieldSpec:
    """Specification for a field before resolution."""

    name: str
    type_name: str
    lineno: int
    default: Any = None
    has_default: bool = False


@dataclass
class TypeSpec:
    """Specification for a record type before resolution."""

    name: str
    lineno: int
    fields: list[FieldSpec] = field(default_factory=list)


class TypeParser:
    """Parser for the record type definition DSL."""

    tokens = TypeLexer.tokens

    def __init__(self) -> None:
        self.lexer = TypeLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore
        self.registry: RecordTypeRegistry = RecordTypeRegistry()

    def p_schema(self, p: yacc.YaccProduction) -> None:
        """schema : type_list"""
        p[0] = p[1]

    def p_schema_empty(self, p: yacc.YaccProduction) -> None:
        """schema :"""
        p[0] = []

    def p_type_list_single(self, p: yacc.YaccProduction) -> None:
        """type_list : type_def"""
        p[0] = [p[1]]

    def p_type_list_multiple(self, p: yacc.YaccProduction) -> None:
        """type_list : type_list type_def"""
        p[0] = p[1] + [p[2]]

    def p_type_def(self, p: yacc.YaccProduction) -> None:
        """type_def : IDENTIFIER LBRACE field_list RBRACE
                    | IDENTIFIER LBRACE field_list COMMA RBRACE"""
        p[0] = TypeSpec(name=p[1], lineno=p.lineno(1), fields=p[3])

    def p_type_def_empty(self, p: yacc.YaccProduction) -> None:
        """type_def : IDENTIFIER LBRACE RBRACE"""
        p[0] = TypeSpec(name=p[1], lineno=p.lineno(1), fields=[])

    def p_field_list_single(self, p: yacc.YaccProduction) -> None:
        """field_list : field"""
        p[0] = [p[1]]

    def p_field_list_comma(self, p: yacc.YaccProduction) -> None:
        """field_list : field_list COMMA field"""
        p[0] = p[1] + [p[3]]

    def p_field_list_juxtaposed(self, p: yacc.YaccProduction) -> None:
        """field_list : field_list field"""
        p[0] = p[1] + [p[2]]

    def p_field(self, p: yacc.YaccProduction) -> None:
        """field : IDENTIFIER COLON IDENTIFIER"""
        p[0] = FieldSpec(name=p[1], type_name=p[3], lineno=p.lineno(1))

    def p_field_with_default(self, p: yacc.YaccProduction) -> None:
        """field : IDENTIFIER COLON IDENTIFIER EQUALS literal"""
        p[0] = FieldSpec(
            name=p[1], type_name=p[3], lineno=p.lineno(1), default=p[5], has_default=True
        )

    def p_literal(self, p: yacc.YaccProduction) -> None:
        """literal : INTEGER
                   | FLOAT
                   | STRING"""
        p[0] = p[1]

    def p_literal_true(self, p: yacc.YaccProduction) -> None:
        """literal : TRUE"""
        p[0] = True

    def p_literal_false(self, p: yacc.YaccProduction) -> None:
        """literal : FALSE"""
        p[0] = False

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (line {p.lineno})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> RecordTypeRegistry:
        """Parse record type definitions and return a populated registry."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        self.registry = RecordTypeRegistry()

        self.lexer.input("")
        specs = self.parser.parse(data, lexer=self.lexer.lexer)
        if specs is None:
            specs = []

        for spec in specs:
            self._resolve_type_spec(spec)

        return self.registry

    def _resolve_type_spec(self, spec: TypeSpec) -> None:
        """Resolve a type spec into a RecordType and register it."""
        if spec.name in self.registry:
            raise ValueError(f"Type '{spec.name}' is already defined (line {spec.lineno})")

        fields: list[FieldDefinition] = []
        seen: set[str] = set()
        for fspec in spec.fields:
            if fspec.name in seen:
                raise ValueError(
                    f"Duplicate field '{fspec.name}' in type '{spec.name}' (line {fspec.lineno})"
                )
            if keyword.iskeyword(fspec.name):
                raise ValueError(
                    f"Field name '{fspec.name}' is a reserved word (line {fspec.lineno})"
                )
            seen.add(fspec.name)

            scalar = SCALAR_TYPE_NAMES.get(fspec.type_name)
            if scalar is None:
                raise ValueError(f"Unknown type '{fspec.type_name}' (line {fspec.lineno})")

            default = None
            if fspec.has_default:
                default = self._resolve_default(fspec, scalar)
            fields.append(FieldDefinition(name=fspec.name, scalar=scalar, default=default))

        self.registry.register(make_record_type(spec.name, fields))

    def _resolve_default(self, fspec: FieldSpec, scalar: ScalarType) -> Any:
        """Check a default literal against its field type."""
        value = fspec.default
        if scalar is ScalarType.FLOAT and type(value) is int:
            return float(value)
        if not scalar.accepts(value):
            raise ValueError(
                f"Default {value!r} for field '{fspec.name}' is not a {scalar.value} "
                f"(line {fspec.lineno})"
            )
        return value
