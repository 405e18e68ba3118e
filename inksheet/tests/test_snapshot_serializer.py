import json

import pytest

from inksheet.config import CUSTOM_PAGE_SIZE
from inksheet.models.sheet_surface import SheetSurface
from inksheet.services.snapshot_serializer import SnapshotError, SnapshotSerializer

from conftest import element


@pytest.fixture
def serializer():
    return SnapshotSerializer()


def test_serialize_is_deterministic(serializer):
    items = [element(20, 30, 5, 6, rotation=45), element(10, 10, kind="text", payload={"text": "Hi"})]
    first = serializer.serialize(items)
    assert first == serializer.serialize(items)
    assert serializer.serialize(serializer.deserialize(first)) == first


def test_empty_scene(serializer):
    text = serializer.serialize([])
    assert json.loads(text) == {"version": 1, "objects": []}
    assert serializer.deserialize(text) == []


def test_restored_items_keep_identity_and_geometry(serializer):
    original = element(40, 20, 100, 50, kind="symbol", rotation=90, payload={"svg": "<svg/>"})
    (restored,) = serializer.deserialize(serializer.serialize([original]))
    assert restored.pid == original.pid
    assert restored.kind == "symbol"
    assert restored.payload == {"svg": "<svg/>"}
    assert restored.bounding_box() == original.bounding_box()


@pytest.mark.parametrize("text", [
    "not json",
    "",
    '{"objects": []}',
    '{"version": 1, "objects": [{"pid": "bad"}]}',
    '{"version": 1, "objects": [], "extra": true}',
    '{"version": 99, "objects": []}',
])
def test_invalid_snapshots_raise(serializer, text):
    with pytest.raises(SnapshotError):
        serializer.deserialize(text)


def test_pid_kind_mismatch_raises(serializer):
    data = json.loads(serializer.serialize([element(10, 10)]))
    data["objects"][0]["kind"] = "text"
    with pytest.raises(SnapshotError):
        serializer.deserialize(json.dumps(data))


def test_save_and_load_sheet(serializer, tmp_path):
    surface = SheetSurface(landscape=False)
    surface.add_item(element(100, 80, 300, 300))
    path = tmp_path / "sheet.json"

    serializer.save_sheet(path, surface)
    loaded = serializer.load_sheet(path)

    assert loaded.page_size == surface.page_size
    assert not loaded.is_landscape
    assert (loaded.width, loaded.height) == (surface.width, surface.height)
    assert serializer.serialize(loaded.list_items()) == serializer.serialize(surface.list_items())


@pytest.mark.parametrize("content", [
    "{",
    '{"page_size": "A5 (210x148 mm)"}',
    '{"page_size": "B0", "landscape": true, "snapshot": "{\\"version\\":1,\\"objects\\":[]}"}',
])
def test_load_bad_sheet_raises(serializer, tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(SnapshotError):
        serializer.load_sheet(path)


def test_load_non_utf8_sheet_raises(serializer, tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b'{"page_size": "\xff\xfe"}')
    with pytest.raises(SnapshotError):
        serializer.load_sheet(path)


def test_custom_size_sheet_keeps_its_geometry(serializer, tmp_path):
    surface = SheetSurface.with_size(400, 300, bleed=10)
    surface.add_item(element(40, 40, 100, 100))
    path = tmp_path / "custom.json"

    serializer.save_sheet(path, surface)
    loaded = serializer.load_sheet(path)

    assert loaded.page_size == CUSTOM_PAGE_SIZE
    assert (loaded.width, loaded.height, loaded.bleed) == (400, 300, 10)
    assert loaded.is_landscape
    assert [it.pid for it in loaded.list_items()] == [it.pid for it in surface.list_items()]


def test_square_portrait_sheet_keeps_orientation(serializer, tmp_path):
    surface = SheetSurface.with_size(300, 300, bleed=0, landscape=False)
    path = tmp_path / "square.json"
    serializer.save_sheet(path, surface)
    assert not serializer.load_sheet(path).is_landscape


def test_custom_sheet_without_size_raises(serializer, tmp_path):
    path = tmp_path / "nosize.json"
    path.write_text(json.dumps({
        "page_size": CUSTOM_PAGE_SIZE,
        "landscape": True,
        "snapshot": serializer.serialize([]),
    }), encoding="utf-8")
    with pytest.raises(SnapshotError):
        serializer.load_sheet(path)
