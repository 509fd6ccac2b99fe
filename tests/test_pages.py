import pytest

from shipcrop.cords import keep_order_pages
from shipcrop.errors import MalformedDocument, NoInputDocuments
from shipcrop.loader import load_document, serialize
from shipcrop.pages import filter_pages, merge_documents

from conftest import page_texts


def test_merge_keeps_order(pdf_factory):
    first = pdf_factory(["a0", "a1"])
    second = pdf_factory(["b0", "b1", "b2"])
    merged = serialize(merge_documents([first, second]))
    assert page_texts(merged) == ["a0", "a1", "b0", "b1", "b2"]


def test_merge_single_document(pdf_factory):
    data = pdf_factory(["one", "two", "three"])
    merged = serialize(merge_documents([data]))
    assert page_texts(merged) == page_texts(data)


def test_merge_aborts_on_bad_input(pdf_factory):
    with pytest.raises(MalformedDocument) as excinfo:
        merge_documents([pdf_factory(["ok"]), b"broken"])
    assert excinfo.value.index == 1


def test_merge_nothing():
    with pytest.raises(NoInputDocuments):
        merge_documents([])


@pytest.mark.parametrize("n", [1, 2, 5, 6])
def test_remove_even_pages(pdf_factory, n):
    source = load_document(pdf_factory([f"p{i}" for i in range(n)]))
    kept = serialize(filter_pages(source, keep_order_pages))
    assert page_texts(kept) == [f"p{i}" for i in range(0, n, 2)]
