from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import Any, Callable

import pytest
from pypdf import PdfWriter
from pypdf.generic import DictionaryObject, IndirectObject, NameObject, NumberObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfinspect.core.exceptions import MalformedEntryError  # noqa: E402


def ref(number: int, generation: int = 0) -> IndirectObject:
    return IndirectObject(number, generation, None)


def make_dict(**entries: Any) -> DictionaryObject:
    return DictionaryObject({NameObject(f"/{key}"): value for key, value in entries.items()})


class FakeReader:
    """In-memory reader capability used to drive the object store."""

    def __init__(
        self,
        objects: dict[int, Any],
        *,
        trailer: DictionaryObject | None = None,
        broken: tuple[int, ...] = (),
    ) -> None:
        self.objects = objects
        self.broken = set(broken)
        self.reads: list[int] = []
        self._trailer = trailer if trailer is not None else DictionaryObject()

    @property
    def trailer(self) -> DictionaryObject:
        return self._trailer

    def entry_count(self) -> int:
        return len(self.objects)

    def object_numbers(self) -> list[tuple[int, int]]:
        return [(number, 0) for number in sorted(self.objects)]

    def read_object(self, number: int, generation: int = 0) -> Any:
        self.reads.append(number)
        if number in self.broken:
            raise MalformedEntryError(number, "corrupt offset")
        return self.objects[number]


class GatedReader(FakeReader):
    """Reader whose reads block until ``gate`` is set."""

    def __init__(self, objects: dict[int, Any], **kwargs: Any) -> None:
        super().__init__(objects, **kwargs)
        self.gate = threading.Event()
        self.started = threading.Event()

    def read_object(self, number: int, generation: int = 0) -> Any:
        self.started.set()
        self.gate.wait(5)
        return super().read_object(number, generation)


class RecordingProgress:
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.threads: set[str] = set()

    def _record(self, *call: Any) -> None:
        self.threads.add(threading.current_thread().name)
        self.calls.append(call)

    def set_total(self, total: int) -> None:
        self._record("total", total)

    def set_value(self, value: int) -> None:
        self._record("value", value)

    def set_message(self, message: str) -> None:
        self._record("message", message)

    def close(self) -> None:
        self._record("close")

    def reports(self, name: str) -> list[Any]:
        return [call[1] for call in self.calls if call[0] == name]


class RecordingConsumer:
    def __init__(self) -> None:
        self.stores: list[Any] = []
        self.errors: list[Exception] = []
        self.threads: set[str] = set()

    @property
    def done(self) -> bool:
        return bool(self.stores or self.errors)

    def update(self, store: Any) -> None:
        self.threads.add(threading.current_thread().name)
        self.stores.append(store)

    def load_failed(self, error: Exception) -> None:
        self.threads.add(threading.current_thread().name)
        self.errors.append(error)


@pytest.fixture()
def cyclic_objects() -> dict[int, Any]:
    """Object 1 points to object 2 through /Next, object 2 back through /Prev."""

    return {
        1: make_dict(Type=NameObject("/Node"), Next=ref(2)),
        2: make_dict(Type=NameObject("/Node"), Prev=ref(1)),
        3: make_dict(Type=NameObject("/Catalog"), First=ref(1)),
    }


@pytest.fixture()
def cyclic_reader(cyclic_objects: dict[int, Any]) -> FakeReader:
    return FakeReader(cyclic_objects, trailer=make_dict(Root=ref(3), Size=NumberObject(4)))


@pytest.fixture()
def reader_factory() -> Callable[..., FakeReader]:
    def _create(objects: dict[int, Any], **kwargs: Any) -> FakeReader:
        return FakeReader(objects, **kwargs)

    return _create


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(2):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "pdfinspect-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def encrypted_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "encrypted.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    writer.encrypt("secret")
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def broken_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "broken.pdf"
    pdf_path.write_bytes(b"this is not a pdf file")
    return pdf_path
