"""Tests for the document model: sorting and merging."""

from samples import UNSORTED_TABS

from outline.core.ir import (
    Docs,
    Document,
    Function,
    ParseOptions,
    TypeSpec,
    merge,
    merge_by_name,
)
from outline.core.parser import parse_text

BOTH = ParseOptions(sort_functions_alphabetically=True, sort_types_alphabetically=True)


def signatures(functions: list[Function]) -> list[str]:
    return [fn.signature for fn in functions]


class TestSort:
    """Docs.sort and Document.sort."""

    def test_sort_all(self) -> None:
        docs = parse_text(UNSORTED_TABS, BOTH)
        docs.sort()

        assert [d.name for d in docs] == ["time", "twoFuncs"]
        time = docs[0]
        assert signatures(time.functions) == [
            "duration(string) duration",
            "now() time",
            "time(string, format=..., location=...) time",
            "zero() time",
        ]
        assert [t.name for t in time.types] == ["duration", "time"]
        assert signatures(time.types[0].methods) == [
            "add(d duration) int",
            "sub(d duration) duration",
        ]

    def test_options_off_keeps_source_order(self) -> None:
        docs = parse_text(UNSORTED_TABS)
        docs.sort()

        time = docs[0]
        assert signatures(time.functions) == [
            "duration(string) duration",
            "time(string, format=..., location=...) time",
            "now() time",
            "zero() time",
        ]
        assert [t.name for t in time.types] == ["time", "duration"]
        assert signatures(time.types[1].methods) == [
            "sub(d duration) duration",
            "add(d duration) int",
        ]

    def test_sort_functions_only(self) -> None:
        docs = parse_text(UNSORTED_TABS, ParseOptions(sort_functions_alphabetically=True))
        docs.sort()
        time = docs[0]
        assert signatures(time.functions)[1] == "now() time"
        assert [t.name for t in time.types] == ["time", "duration"]

    def test_sort_is_idempotent(self) -> None:
        once = parse_text(UNSORTED_TABS, BOTH)
        once.sort()
        twice = parse_text(UNSORTED_TABS, BOTH)
        twice.sort()
        twice.sort()
        assert once == twice

    def test_sort_is_stable(self) -> None:
        doc = Document(
            name="d",
            functions=[
                Function(signature="f()", description="first"),
                Function(signature="a()"),
                Function(signature="f()", description="second"),
            ],
        )
        doc.sort(ParseOptions(sort_functions_alphabetically=True))
        assert [fn.description for fn in doc.functions] == ["", "first", "second"]

    def test_docs_ordered_by_joined_path_and_name(self) -> None:
        docs = Docs(
            documents=[
                Document(name="b", path="x/"),
                Document(name="z"),
                Document(name="a", path="x/"),
            ]
        )
        docs.sort()
        assert [(d.path, d.name) for d in docs] == [("x/", "a"), ("x/", "b"), ("", "z")]

    def test_params_keep_source_order(self) -> None:
        docs = parse_text(
            "outline: a\n  functions:\n    f(z, a)\n      params:\n        z\n        a\n",
            BOTH,
        )
        docs.sort()
        assert [p.name for p in docs[0].functions[0].params] == ["z", "a"]


class TestMerge:
    """merge and merge_by_name."""

    def test_merge_backfills_and_appends(self) -> None:
        a = Document(name="pkg", types=[TypeSpec(name="A")])
        b = Document(name="pkg", description="desc", types=[TypeSpec(name="B")])
        merge(a, b)
        assert a.description == "desc"
        assert [t.name for t in a.types] == ["A", "B"]

    def test_merge_keeps_existing_values(self) -> None:
        a = Document(name="pkg", description="mine", path="p", functions=[Function(signature="f()")])
        b = Document(name="pkg", description="theirs", path="q", functions=[Function(signature="f()")])
        merge(a, b)
        assert a.description == "mine"
        assert a.path == "p"
        assert signatures(a.functions) == ["f()", "f()"]

    def test_merge_by_name(self) -> None:
        merged = merge_by_name(
            [
                Document(name="pkg", types=[TypeSpec(name="A")]),
                Document(name="other"),
                Document(name="pkg", path="pkg", types=[TypeSpec(name="B")]),
            ]
        )
        assert [d.name for d in merged] == ["pkg", "other"]
        assert merged[0].path == "pkg"
        assert [t.name for t in merged[0].types] == ["A", "B"]


class TestSerialization:
    """JSON dumps of the model."""

    def test_return_alias(self) -> None:
        fn = Function(signature="f()", return_="int")
        assert fn.model_dump(by_alias=True)["return"] == "int"
        assert Function.model_validate({"signature": "f()", "return": "int"}).return_ == "int"
