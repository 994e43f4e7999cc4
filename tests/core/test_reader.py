from __future__ import annotations

from pathlib import Path

import pytest

from pdfinspect.core.exceptions import EncryptedDocumentError, InvalidDocumentError
from pdfinspect.core.objects import ObjectKind, kind_of
from pdfinspect.core.progress import NullProgress
from pdfinspect.core.reader import PypdfObjectReader
from pdfinspect.core.store import ObjectStore, populate_store
from pdfinspect.nodetypes import NodeVariant, ObjectTreeNode, TreeNodeFactory


def test_reader_lists_in_use_entries(sample_pdf: Path) -> None:
    reader = PypdfObjectReader.open(sample_pdf)

    entries = reader.object_numbers()

    assert entries
    assert reader.entry_count() == len(entries)
    numbers = [number for number, _ in entries]
    assert numbers == sorted(set(numbers))
    assert 0 not in numbers


def test_reader_populates_store(sample_pdf: Path) -> None:
    reader = PypdfObjectReader.open(sample_pdf)
    store = populate_store(ObjectStore(reader), NullProgress())

    assert store.current == reader.entry_count()
    types = {
        str(obj.get("/Type"))
        for _, obj in store.items()
        if kind_of(obj) is ObjectKind.DICTIONARY and "/Type" in obj
    }
    assert {"/Catalog", "/Pages", "/Page"} <= types
    root = reader.trailer.raw_get("/Root")
    assert kind_of(root) is ObjectKind.INDIRECT_REFERENCE
    assert root.idnum in store


def test_open_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidDocumentError):
        PypdfObjectReader.open(tmp_path / "missing.pdf")


def test_open_invalid_file(broken_pdf: Path) -> None:
    with pytest.raises(InvalidDocumentError):
        PypdfObjectReader.open(broken_pdf)


def test_open_encrypted_file_requires_password(encrypted_pdf: Path) -> None:
    with pytest.raises(EncryptedDocumentError):
        PypdfObjectReader.open(encrypted_pdf)
    with pytest.raises(EncryptedDocumentError):
        PypdfObjectReader.open(encrypted_pdf, password="wrong")

    reader = PypdfObjectReader.open(encrypted_pdf, password="secret")
    assert reader.entry_count() > 0


def _entry(node: ObjectTreeNode, key: str) -> ObjectTreeNode:
    return next(child for child in node.children if child.is_dictionary_node(key))


def test_object_tree_of_real_document(sample_pdf: Path) -> None:
    store = populate_store(ObjectStore(PypdfObjectReader.open(sample_pdf)), NullProgress())
    trailer = TreeNodeFactory(store).trailer_node()

    (catalog,) = _entry(trailer, "Root").children
    assert catalog.caption == "Dictionary of type: /Catalog"

    pages_ref = _entry(catalog, "Pages")
    (pages,) = pages_ref.children
    assert pages.variant is NodeVariant.PAGE_TREE
    assert pages.is_expanded

    kids = _entry(pages, "Kids")
    assert len(kids.children) == 2
    (page,) = kids.children[0].children
    assert page.variant is NodeVariant.PAGE

    parent = _entry(page, "Parent")
    assert parent.recursive
    assert parent.children == ()
    assert parent.get_ancestor() is pages_ref
