"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
from builders import note, track

from chartfix.__main__ import main
from chartfix.document import Document
from chartfix.midi_file import load_document, save_document
from chartfix.names import TrackName


@pytest.fixture
def export_path(exported_chart: Document, tmp_path: Path) -> Path:
    return save_document(exported_chart, tmp_path / "export.mid")


class TestFixCommand:
    """chartfix <midi>"""

    def test_fix(self, export_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        out = tmp_path / "fixed.mid"
        report_path = tmp_path / "report.json"

        main([str(export_path), "--out", str(out), "--report", str(report_path)])

        assert load_document(out).find_track(TrackName.VENUE) is not None
        report = json.loads(report_path.read_text())
        assert report["success"] is True
        assert report["output_midi"] == str(out)
        assert report["ticks_per_quarter"] == 480
        assert any(m["text"].startswith("Adding [mix 0 drums0]") for m in report["messages"])
        stdout = capsys.readouterr().out
        assert "[INFO] Adding [mix 0 drums0] to PART DRUMS" in stdout
        assert f"Wrote fixed MIDI to {out}" in stdout

    def test_default_output_name(self, export_path: Path) -> None:
        main([str(export_path)])

        assert (export_path.parent / "export_clean.mid").exists()

    def test_explicit_subcommand(self, export_path: Path, tmp_path: Path) -> None:
        out = tmp_path / "fixed.mid"

        main(["fix", str(export_path), "--out", str(out)])

        assert out.exists()

    def test_options(self, export_path: Path, tmp_path: Path) -> None:
        out = tmp_path / "fixed.mid"

        main([str(export_path), "--out", str(out), "--ppq", "960", "--velocity", "100"])

        fixed = load_document(out)
        assert fixed.ticks_per_quarter == 960
        assert {n.velocity for n in fixed.get_track(TrackName.BEAT).notes()} == {100}

    def test_structural_error(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        broken = Document(
            ticks_per_quarter=480,
            tracks=[track(TrackName.BEAT, note(0, 2), note(480, 12)), track(TrackName.DRUMS)],
        )
        source = save_document(broken, tmp_path / "broken.mid")
        report_path = tmp_path / "report.json"

        with pytest.raises(SystemExit) as exc_info:
            main([str(source), "--report", str(report_path)])

        assert exc_info.value.code == 1
        assert "Error [E_BEAT_TRACK]: Invalid beats detected." in capsys.readouterr().err
        report = json.loads(report_path.read_text())
        assert report["success"] is False
        assert report["output_midi"] is None
        assert report["error"]["code"] == "E_BEAT_TRACK"
        assert [m["level"] for m in report["messages"]].count("error") == 1
        assert not (tmp_path / "broken_clean.mid").exists()

    def test_missing_file(self, tmp_path: Path) -> None:
        report_path = tmp_path / "report.json"

        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.mid"), "--report", str(report_path)])

        assert exc_info.value.code == 1
        assert json.loads(report_path.read_text())["error"]["code"] == "E_FILE_NOT_FOUND"

    @pytest.mark.parametrize("option, value", [("--ppq", "0"), ("--velocity", "200")])
    def test_invalid_options(
        self,
        export_path: Path,
        tmp_path: Path,
        capsys: pytest.CaptureFixture,
        option: str,
        value: str,
    ) -> None:
        out = tmp_path / "fixed.mid"

        with pytest.raises(SystemExit) as exc_info:
            main([str(export_path), "--out", str(out), option, value])

        assert exc_info.value.code == 1
        assert "Error [E_CONFIG]: Invalid options" in capsys.readouterr().err
        assert not out.exists()


class TestDumpCommand:
    """chartfix dump <midi>"""

    def test_dump_to_file(self, export_path: Path, tmp_path: Path) -> None:
        out = tmp_path / "dump.txt"

        main(["dump", str(export_path), "--out", str(out)])

        text = out.read_text()
        assert text.startswith("Format: 1, ticks per quarter note: 96, tracks: 6\n")
        assert "Unnamed Track: 0" in text

    def test_dump_to_stdout(self, export_path: Path, capsys: pytest.CaptureFixture) -> None:
        main(["dump", str(export_path)])

        assert "PART DRUMS" in capsys.readouterr().out

    def test_dump_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["dump", str(tmp_path / "missing.mid")])
