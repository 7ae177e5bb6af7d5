import logging

import pytest

import geoscene.__main__ as cli
from geoscene.parser import ResolutionError


DOC = """Intro

```geometry
Point A (100, 100)
Point B (300, 100)
Segment s A B
```

```geometry
Point O (250, 250)
Point P (300, 250)
Circle c O P
```
"""


def test_main_writes_one_png_per_block(tmp_path, capsys):
    doc = tmp_path / "notes.md"
    doc.write_text(DOC, encoding="utf-8")
    out_dir = tmp_path / "out"

    cli.main([str(doc), "--output-dir", str(out_dir)])

    written = sorted(p.name for p in out_dir.iterdir())
    assert written == ["notes-0.png", "notes-1.png"]
    assert (out_dir / "notes-0.png").read_bytes().startswith(b"\x89PNG")
    assert "Block 1 written to" in capsys.readouterr().out


def test_raw_geo_file_is_one_block(tmp_path, monkeypatch):
    src = tmp_path / "triangle.geo"
    src.write_text("Point A (1, 2)\nPoint B (3, 4)\nSegment s A B\n", encoding="utf-8")

    seen = []
    monkeypatch.setattr(cli.SceneView, "save", lambda self, path: seen.append((len(self.scene), path.name)))

    cli.main([str(src), "--output-dir", str(tmp_path)])

    assert seen == [(3, "triangle-0.png")]


def test_strict_mode_fails_on_bad_line(tmp_path):
    src = tmp_path / "bad.geo"
    src.write_text("Point A (1, 2)\nSegment s A Z\n", encoding="utf-8")

    cli.main([str(src)])
    with pytest.raises(ResolutionError):
        cli.main([str(src), "--strict"])


def test_no_blocks_exits_with_error(tmp_path, caplog):
    doc = tmp_path / "empty.md"
    doc.write_text("nothing to draw\n", encoding="utf-8")

    with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc:
        cli.main([str(doc)])
    assert exc.value.code == 1
    assert "No geometry blocks" in caplog.text
