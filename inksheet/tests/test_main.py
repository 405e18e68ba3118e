import json

import pytest

from inksheet.main import build_parser, main
from inksheet.models.sheet_surface import SheetSurface
from inksheet.services.snapshot_serializer import SnapshotSerializer

from conftest import element


@pytest.fixture
def sheet_file(tmp_path):
    surface = SheetSurface(page_size="A6 (148x105 mm)")
    surface.add_item(element(300, 300, 500, 500))
    path = tmp_path / "sheet.json"
    SnapshotSerializer().save_sheet(path, surface)
    return path


def count_items(path):
    data = json.loads(path.read_text(encoding="utf-8"))
    return len(json.loads(data["snapshot"])["objects"])


def test_parser_orientation_flags():
    parser = build_parser()
    assert parser.parse_args(["s.json"]).landscape is None
    assert parser.parse_args(["s.json", "--portrait"]).landscape is False
    assert parser.parse_args(["s.json", "--landscape"]).landscape is True
    with pytest.raises(SystemExit):
        parser.parse_args(["s.json", "--portrait", "--landscape"])


def test_parser_dimensions():
    args = build_parser().parse_args(["s.json", "--gutter", "1in", "--padding", "24px"])
    assert args.gutter == pytest.approx(300)
    assert args.padding == 24
    with pytest.raises(SystemExit):
        build_parser().parse_args(["s.json", "--gutter", "wide"])


def test_large_gutter_limits_fill(sheet_file, tmp_path):
    tight = tmp_path / "tight.json"
    loose = tmp_path / "loose.json"
    main([str(sheet_file), "--fill", "--gutter", "0px", "--export", str(tight)])
    main([str(sheet_file), "--fill", "--gutter", "100px", "--export", str(loose)])
    assert count_items(loose) < count_items(tight)


def test_fill_writes_export(sheet_file, tmp_path, capsys):
    out = tmp_path / "filled.json"
    assert main([str(sheet_file), "--fill", "--export", str(out)]) == 0
    assert count_items(out) > 1
    # the input is left alone when exporting elsewhere
    assert count_items(sheet_file) == 1
    assert "Sheet filled" in capsys.readouterr().out


def test_portrait_switch_is_saved(sheet_file):
    assert main([str(sheet_file), "--portrait"]) == 0
    data = json.loads(sheet_file.read_text(encoding="utf-8"))
    assert data["landscape"] is False


def test_total_failure_exit_code(tmp_path):
    surface = SheetSurface(page_size="A6 (148x105 mm)")
    surface.add_item(element(5000, 5000))
    path = tmp_path / "huge.json"
    SnapshotSerializer().save_sheet(path, surface)
    assert main([str(path), "--fill"]) == 1


def test_missing_sheet_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope.json")])
    assert exc.value.code == 2


def test_corrupt_sheet_exits(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main([str(path)])
    assert exc.value.code == 2


def test_non_utf8_sheet_exits(tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b'{"page_size": "\xff\xfe"}')
    with pytest.raises(SystemExit) as exc:
        main([str(path)])
    assert exc.value.code == 2
