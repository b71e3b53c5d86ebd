"""schema_merge.merge

Structural merge of GraphQL SDL fragments.

Fragments are parsed with graphql-core and combined *by name*, not by
concatenation:

* object / interface / input types: fields and implemented interfaces are
  unioned in first-seen order
* enums: values unioned; unions: member types unioned
* scalars and directive definitions: deduplicated by name
* ``extend type X`` folds into the definition of ``X`` when one exists
* schema definitions/extensions: operation types merged by operation

Incompatible redefinitions raise :class:`MergeConflict`. The result is a plain
``DocumentNode`` that :func:`print_schema_document` turns into SDL text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Type, Union

from graphql import GraphQLSyntaxError, parse, print_ast
from graphql.language import (
    DefinitionNode,
    DirectiveDefinitionNode,
    DirectiveNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    EnumValueDefinitionNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    NameNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    OperationType,
    OperationTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    StringValueNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
)

from .errors import FragmentParseError, MergeConflict
from .fragments import SchemaFragment

logger = logging.getLogger(__name__)

ValueDefinitionNode = Union[FieldDefinitionNode, InputValueDefinitionNode]

DEFAULT_ROOT_TYPES: Tuple[Tuple[OperationType, str], ...] = (
    (OperationType.QUERY, "Query"),
    (OperationType.MUTATION, "Mutation"),
    (OperationType.SUBSCRIPTION, "Subscription"),
)


# ----------------------------
# Type families
# ----------------------------

@dataclass(frozen=True)
class _Family:
    kind: str
    definition: Type[DefinitionNode]
    extension: Type[DefinitionNode]


_OBJECT = _Family("object", ObjectTypeDefinitionNode, ObjectTypeExtensionNode)
_INTERFACE = _Family("interface", InterfaceTypeDefinitionNode, InterfaceTypeExtensionNode)
_INPUT = _Family("input", InputObjectTypeDefinitionNode, InputObjectTypeExtensionNode)
_ENUM = _Family("enum", EnumTypeDefinitionNode, EnumTypeExtensionNode)
_UNION = _Family("union", UnionTypeDefinitionNode, UnionTypeExtensionNode)
_SCALAR = _Family("scalar", ScalarTypeDefinitionNode, ScalarTypeExtensionNode)

_FAMILIES: Tuple[_Family, ...] = (_OBJECT, _INTERFACE, _INPUT, _ENUM, _UNION, _SCALAR)


def _family_of(node: DefinitionNode) -> Optional[Tuple[_Family, bool]]:
    """Return (family, is_extension) for a named type node, else None."""
    for fam in _FAMILIES:
        if isinstance(node, fam.definition):
            return fam, False
        if isinstance(node, fam.extension):
            return fam, True
    return None


# ----------------------------
# Small node helpers
# ----------------------------

def _name(value: str) -> NameNode:
    return NameNode(value=value)


def _merge_description(
    a: Optional[StringValueNode], b: Optional[StringValueNode]
) -> Optional[StringValueNode]:
    if a is not None and a.value:
        return a
    return b if b is not None and b.value else a


def _merge_directive_usages(
    existing: Iterable[DirectiveNode], incoming: Iterable[DirectiveNode]
) -> Tuple[DirectiveNode, ...]:
    """Union directive usages, dropping exact duplicates."""
    out: Dict[str, DirectiveNode] = {}
    for d in list(existing or ()) + list(incoming or ()):
        out.setdefault(print_ast(d), d)
    return tuple(out.values())


def _union_named(
    existing: Iterable[NamedTypeNode], incoming: Iterable[NamedTypeNode]
) -> Tuple[NamedTypeNode, ...]:
    out: Dict[str, NamedTypeNode] = {}
    for t in list(existing or ()) + list(incoming or ()):
        out.setdefault(t.name.value, t)
    return tuple(out.values())


def _compatible_type_refs(old: TypeNode, new: TypeNode) -> bool:
    """True when *old* and *new* differ at most in nullability."""
    if isinstance(old, NamedTypeNode) and isinstance(new, NamedTypeNode):
        return old.name.value == new.name.value
    if isinstance(new, NonNullTypeNode):
        inner = old.type if isinstance(old, NonNullTypeNode) else old
        return _compatible_type_refs(inner, new.type)
    if isinstance(old, NonNullTypeNode):
        return _compatible_type_refs(new, old)
    if isinstance(old, ListTypeNode):
        return isinstance(new, ListTypeNode) and _compatible_type_refs(old.type, new.type)
    return False


def _merge_type_ref(old: TypeNode, new: TypeNode) -> Optional[TypeNode]:
    """Merged type reference, or None when the two are incompatible.

    Non-null wins at every level: ``[Int]!`` + ``[Int!]`` becomes ``[Int!]!``.
    """
    if not _compatible_type_refs(old, new):
        return None
    return _combine_type_refs(old, new)


def _combine_type_refs(old: TypeNode, new: TypeNode) -> TypeNode:
    # Callers guarantee compatibility, so both inner types are lists or both named.
    non_null = isinstance(old, NonNullTypeNode) or isinstance(new, NonNullTypeNode)
    old_inner = old.type if isinstance(old, NonNullTypeNode) else old
    new_inner = new.type if isinstance(new, NonNullTypeNode) else new

    if isinstance(old_inner, ListTypeNode):
        inner: TypeNode = ListTypeNode(type=_combine_type_refs(old_inner.type, new_inner.type))
    else:
        inner = old_inner
    return NonNullTypeNode(type=inner) if non_null else inner


# ----------------------------
# Accumulators
# ----------------------------

@dataclass
class _TypeEntry:
    name: str
    family: _Family
    is_extension: bool
    description: Optional[StringValueNode] = None
    directives: Tuple[DirectiveNode, ...] = ()
    interfaces: Tuple[NamedTypeNode, ...] = ()
    fields: Dict[str, ValueDefinitionNode] = field(default_factory=dict)
    values: Dict[str, EnumValueDefinitionNode] = field(default_factory=dict)
    types: Tuple[NamedTypeNode, ...] = ()
    sources: List[str] = field(default_factory=list)


@dataclass
class _SchemaEntry:
    is_extension: bool
    description: Optional[StringValueNode] = None
    directives: Tuple[DirectiveNode, ...] = ()
    operations: Dict[OperationType, OperationTypeDefinitionNode] = field(default_factory=dict)
    sources: List[str] = field(default_factory=list)


class SchemaMerger:
    """Accumulate parsed fragments and build one merged document.

    Usage::

        merger = SchemaMerger()
        merger.add_document(parse(text_a), "a.graphql")
        merger.add_document(parse(text_b), "b.graphql")
        doc = merger.build()
    """

    def __init__(self, *, use_schema_definition: bool = True, sort: bool = False) -> None:
        self.use_schema_definition = use_schema_definition
        self.sort = sort
        self._types: Dict[str, _TypeEntry] = {}
        self._directives: Dict[str, DirectiveDefinitionNode] = {}
        self._directive_sources: Dict[str, List[str]] = {}
        # Type and directive definitions interleaved in first-seen order.
        self._order: List[Tuple[str, str]] = []
        self._schema: Optional[_SchemaEntry] = None

    # ----------------------------
    # Input
    # ----------------------------

    def add_document(self, document: DocumentNode, source: str) -> None:
        for node in document.definitions:
            fam = _family_of(node)
            if fam is not None:
                self._add_type(node, fam[0], fam[1], source)
            elif isinstance(node, DirectiveDefinitionNode):
                self._add_directive(node, source)
            elif isinstance(node, (SchemaDefinitionNode, SchemaExtensionNode)):
                self._add_schema(node, source)
            else:
                logger.warning(
                    "Skipping non-schema definition (%s) in %s", node.kind, source
                )

    def _add_type(self, node, family: _Family, is_extension: bool, source: str) -> None:
        name = node.name.value
        entry = self._types.get(name)

        if entry is None:
            entry = _TypeEntry(name=name, family=family, is_extension=is_extension)
            self._types[name] = entry
            self._order.append(("type", name))
        elif entry.family is not family:
            raise MergeConflict(
                name,
                f"{entry.family.kind} type conflicts with {family.kind} type",
                sources=entry.sources + [source],
            )

        entry.sources.append(source)
        if not is_extension:
            entry.is_extension = False
            entry.description = _merge_description(entry.description, node.description)
        entry.directives = _merge_directive_usages(entry.directives, node.directives)

        if family in (_OBJECT, _INTERFACE):
            entry.interfaces = _union_named(entry.interfaces, node.interfaces)
        if family in (_OBJECT, _INTERFACE, _INPUT):
            for f in node.fields or ():
                self._add_field(entry, f)
        elif family is _ENUM:
            for v in node.values or ():
                self._add_enum_value(entry, v)
        elif family is _UNION:
            entry.types = _union_named(entry.types, node.types)

    def _add_field(self, entry: _TypeEntry, incoming: ValueDefinitionNode) -> None:
        fname = incoming.name.value
        existing = entry.fields.get(fname)
        if existing is None:
            entry.fields[fname] = incoming
            return
        entry.fields[fname] = self._merge_value_definition(
            f"{entry.name}.{fname}", existing, incoming, entry.sources
        )

    def _merge_value_definition(
        self,
        where: str,
        existing: ValueDefinitionNode,
        incoming: ValueDefinitionNode,
        sources: Sequence[str],
    ) -> ValueDefinitionNode:
        merged_type = _merge_type_ref(existing.type, incoming.type)
        if merged_type is None:
            raise MergeConflict(
                where.split(".", 1)[0],
                f'field "{where}" changed type from "{print_ast(existing.type)}" '
                f'to "{print_ast(incoming.type)}"',
                sources=sources,
            )

        description = _merge_description(existing.description, incoming.description)
        directives = _merge_directive_usages(existing.directives, incoming.directives)

        if isinstance(existing, FieldDefinitionNode):
            return FieldDefinitionNode(
                description=description,
                name=existing.name,
                arguments=self._merge_arguments(
                    where, existing.arguments, incoming.arguments, sources
                ),
                type=merged_type,
                directives=directives,
            )

        default_value = existing.default_value
        if default_value is None:
            default_value = incoming.default_value
        return InputValueDefinitionNode(
            description=description,
            name=existing.name,
            type=merged_type,
            default_value=default_value,
            directives=directives,
        )

    def _merge_arguments(
        self,
        where: str,
        existing: Iterable[InputValueDefinitionNode],
        incoming: Iterable[InputValueDefinitionNode],
        sources: Sequence[str],
    ) -> Tuple[InputValueDefinitionNode, ...]:
        out: Dict[str, InputValueDefinitionNode] = {a.name.value: a for a in existing or ()}
        for arg in incoming or ():
            aname = arg.name.value
            if aname in out:
                out[aname] = self._merge_value_definition(
                    f"{where}({aname})", out[aname], arg, sources
                )
            else:
                out[aname] = arg
        return tuple(out.values())

    def _add_enum_value(self, entry: _TypeEntry, incoming: EnumValueDefinitionNode) -> None:
        vname = incoming.name.value
        existing = entry.values.get(vname)
        if existing is None:
            entry.values[vname] = incoming
            return
        entry.values[vname] = EnumValueDefinitionNode(
            description=_merge_description(existing.description, incoming.description),
            name=existing.name,
            directives=_merge_directive_usages(existing.directives, incoming.directives),
        )

    def _add_directive(self, node: DirectiveDefinitionNode, source: str) -> None:
        name = node.name.value
        sources = self._directive_sources.setdefault(name, [])
        sources.append(source)

        existing = self._directives.get(name)
        if existing is None:
            self._directives[name] = node
            self._order.append(("directive", name))
            return

        locations: Dict[str, NameNode] = {}
        for loc in list(existing.locations or ()) + list(node.locations or ()):
            locations.setdefault(loc.value, loc)

        self._directives[name] = DirectiveDefinitionNode(
            description=_merge_description(existing.description, node.description),
            name=existing.name,
            arguments=self._merge_arguments(
                f"@{name}", existing.arguments, node.arguments, sources
            ),
            repeatable=bool(existing.repeatable or node.repeatable),
            locations=tuple(locations.values()),
        )

    def _add_schema(self, node, source: str) -> None:
        is_extension = isinstance(node, SchemaExtensionNode)
        if self._schema is None:
            self._schema = _SchemaEntry(is_extension=is_extension)
        entry = self._schema
        entry.sources.append(source)

        if not is_extension:
            entry.is_extension = False
            entry.description = _merge_description(entry.description, node.description)
        entry.directives = _merge_directive_usages(entry.directives, node.directives)

        for op in node.operation_types or ():
            existing = entry.operations.get(op.operation)
            if existing is None:
                entry.operations[op.operation] = op
            elif existing.type.name.value != op.type.name.value:
                raise MergeConflict(
                    "schema",
                    f"{op.operation.value} root bound to both "
                    f'"{existing.type.name.value}" and "{op.type.name.value}"',
                    sources=entry.sources,
                )

    # ----------------------------
    # Output
    # ----------------------------

    def build(self) -> DocumentNode:
        definitions: List[DefinitionNode] = []

        schema_node = self._build_schema()
        if schema_node is not None:
            definitions.append(schema_node)

        order = list(self._order)
        if self.sort:
            order.sort(key=lambda item: (item[1], item[0]))

        for kind, name in order:
            if kind == "type":
                definitions.append(self._build_type(self._types[name]))
            else:
                definitions.append(self._directives[name])

        return DocumentNode(definitions=tuple(definitions))

    def _build_schema(self) -> Optional[DefinitionNode]:
        entry = self._schema
        if entry is None:
            if not self.use_schema_definition:
                return None
            entry = _SchemaEntry(is_extension=False)

        operations = dict(entry.operations)
        if self.use_schema_definition:
            for op, type_name in DEFAULT_ROOT_TYPES:
                root = self._types.get(type_name)
                if op not in operations and root is not None and root.family is _OBJECT:
                    operations[op] = OperationTypeDefinitionNode(
                        operation=op, type=NamedTypeNode(name=_name(type_name))
                    )

        if not operations and not entry.directives:
            return None

        ops = tuple(
            operations[op] for op, _ in DEFAULT_ROOT_TYPES if op in operations
        )
        if entry.is_extension:
            return SchemaExtensionNode(directives=entry.directives, operation_types=ops)
        return SchemaDefinitionNode(
            description=entry.description,
            directives=entry.directives,
            operation_types=ops,
        )

    @staticmethod
    def _build_type(entry: _TypeEntry) -> DefinitionNode:
        fam = entry.family
        cls = fam.extension if entry.is_extension else fam.definition
        kwargs = {"name": _name(entry.name), "directives": entry.directives}
        if not entry.is_extension:
            kwargs["description"] = entry.description

        if fam in (_OBJECT, _INTERFACE):
            kwargs["interfaces"] = entry.interfaces
        if fam in (_OBJECT, _INTERFACE, _INPUT):
            kwargs["fields"] = tuple(entry.fields.values())
        elif fam is _ENUM:
            kwargs["values"] = tuple(entry.values.values())
        elif fam is _UNION:
            kwargs["types"] = entry.types
        return cls(**kwargs)


# ----------------------------
# Public API
# ----------------------------

def parse_fragment(fragment: SchemaFragment) -> DocumentNode:
    try:
        return parse(fragment.text, no_location=True)
    except GraphQLSyntaxError as e:
        raise FragmentParseError(fragment.source, e.message) from e


def merge_fragments(
    fragments: Sequence[SchemaFragment],
    *,
    use_schema_definition: bool = True,
    sort: bool = False,
) -> DocumentNode:
    """Parse and merge *fragments* in the given order."""
    merger = SchemaMerger(use_schema_definition=use_schema_definition, sort=sort)
    for fragment in fragments:
        if not fragment.text.strip():
            logger.debug("skipping blank fragment %s", fragment.source)
            continue
        merger.add_document(parse_fragment(fragment), fragment.source)
    return merger.build()


def merge_type_defs(type_defs: Sequence[str], **kwargs) -> DocumentNode:
    """Merge raw SDL strings; sources are labelled by position."""
    fragments = [
        SchemaFragment(source=f"<fragment {i}>", text=text)
        for i, text in enumerate(type_defs, start=1)
    ]
    return merge_fragments(fragments, **kwargs)


def print_schema_document(document: DocumentNode) -> str:
    """Print *document* as SDL; non-empty output ends with one newline."""
    text = print_ast(document)
    return f"{text}\n" if text else ""
