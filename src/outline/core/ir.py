"""
Document model for the outline notation.

The parser produces these types; the serializer and renderers read them.
Models are mutable so that sorting and merging can operate in place.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field


class ParseOptions(BaseModel):
    """
    Options accepted by the parsing entry points.

    Attributes:
        sort_functions_alphabetically: Sort each document's functions by signature
        sort_types_alphabetically: Sort each document's types by name, and
            their methods by signature
    """

    sort_functions_alphabetically: bool = False
    sort_types_alphabetically: bool = False

    model_config = ConfigDict(frozen=True)


class Param(BaseModel):
    """An argument to a function, written as ``name [type]``."""

    name: str
    type: str = ""
    description: str = ""


class Example(BaseModel):
    """
    A named usage example.

    ``code`` keeps its line breaks; so does ``description``.
    """

    name: str
    code: str = ""
    description: str = ""


class Function(BaseModel):
    """
    A documented function or method.

    Attributes:
        function_name: Identifier part of the signature, before the first "("
        receiver: Name of the owning document or type, set by the parser
        signature: Full signature text, e.g. "sum(a,b int) int"
        description: Joined description text
        params: Parameters in source order
        return_: Return value description (serialized as "return")
        examples: Examples in source order
    """

    function_name: str = ""
    receiver: str = ""
    signature: str
    description: str = ""
    params: list[Param] = Field(default_factory=list)
    return_: str = Field(default="", alias="return")
    examples: list[Example] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class FieldSpec(BaseModel):
    """A property of a type, written as ``name [type]``."""

    name: str
    type: str = ""
    description: str = ""


class Operator(BaseModel):
    """An operator supported by a type, e.g. ``duration + time = time``."""

    expression: str
    description: str = ""


class TypeSpec(BaseModel):
    """
    A documented type.

    Attributes:
        name: Type name
        description: Joined description text
        methods: Methods in source order (or signature order once sorted)
        fields: Fields in source order
        operators: Operators in source order
    """

    name: str
    description: str = ""
    methods: list[Function] = Field(default_factory=list)
    fields: list[FieldSpec] = Field(default_factory=list)
    operators: list[Operator] = Field(default_factory=list)

    def sort_methods(self) -> None:
        """Stably reorder methods by signature."""
        self.methods.sort(key=lambda fn: fn.signature)


class Document(BaseModel):
    """
    One top-level outline record, opened by ``outline:``.

    Attributes:
        name: First text following the keyword at the same or a deeper indent, or empty
        path: Value of the ``path:`` block, or empty
        description: Joined description text
        functions: Functions in source order
        types: Types in source order
    """

    name: str = ""
    path: str = ""
    description: str = ""
    functions: list[Function] = Field(default_factory=list)
    types: list[TypeSpec] = Field(default_factory=list)

    def sort(self, options: ParseOptions) -> None:
        """Sort functions and types in place according to options."""
        if options.sort_functions_alphabetically:
            self.functions.sort(key=lambda fn: fn.signature)
        if options.sort_types_alphabetically:
            self.types.sort(key=lambda t: t.name)
            for t in self.types:
                t.sort_methods()

    def marshal_indent(self, depth: int = 0, indent: str = "  ") -> str:
        """Render this document in canonical outline notation."""
        from .serializer import marshal_indent

        return marshal_indent(self, depth, indent)


class Docs(BaseModel):
    """
    An ordered collection of documents and the options that parsed them.
    """

    documents: list[Document] = Field(default_factory=list)
    options: ParseOptions = Field(default_factory=ParseOptions)

    def __iter__(self) -> Iterator[Document]:  # type: ignore[override]
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    def __getitem__(self, index: int) -> Document:
        return self.documents[index]

    def append(self, doc: Document) -> None:
        self.documents.append(doc)

    def extend(self, docs: Iterable[Document]) -> None:
        self.documents.extend(docs)

    def sort(self) -> None:
        """
        Sort every document, then the collection itself.

        Documents are stably ordered by ``path + name``.
        """
        for doc in self.documents:
            doc.sort(self.options)
        self.documents.sort(key=lambda d: d.path + d.name)


def merge(dest: Document, src: Document) -> Document:
    """
    Merge src into dest in place.

    Empty ``description`` and ``path`` on dest are backfilled from src, then
    src's types and functions are appended. Nothing is deduplicated.

    Returns:
        dest
    """
    if not dest.description:
        dest.description = src.description
    if not dest.path:
        dest.path = src.path
    dest.types.extend(src.types)
    dest.functions.extend(src.functions)
    return dest


def merge_by_name(documents: Iterable[Document]) -> list[Document]:
    """
    Fold documents sharing a name into the first one seen.

    Returns:
        Documents in first-seen order, one per distinct name
    """
    by_name: dict[str, Document] = {}
    for doc in documents:
        found = by_name.get(doc.name)
        if found is not None:
            merge(found, doc)
            continue
        by_name[doc.name] = doc
    return list(by_name.values())
