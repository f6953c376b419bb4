"""Tests for the command line exporter."""

import csv

import pytest

import export_clips_csv


@pytest.fixture(autouse=True)
def keep_logging(monkeypatch):
    # Leave the application logger's handlers alone while capturing output
    monkeypatch.setattr(export_clips_csv, "setup_logging", lambda **kwargs: None)


@pytest.fixture
def project_file(tmp_path, sunset_xml):
    path = tmp_path / "holiday.xml"
    path.write_text(sunset_xml, encoding="utf-8")
    return path


def test_writes_csv(project_file, tmp_path, capsys):
    out = tmp_path / "clips.csv"
    assert export_clips_csv.main(["-i", str(project_file), "-o", str(out)]) == 0

    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Name", "Type", "Source", "ID", "Timecodes"]
    assert rows[1] == ["sunset", "Video", "Colourbox", "4567", "00:00:00 - 00:00:04\n00:00:20 - 00:00:24"]
    assert "Wrote 1 clips" in capsys.readouterr().out


def test_default_output_path(project_file):
    assert export_clips_csv.main(["--input", str(project_file)]) == 0
    assert (project_file.parent / "holiday_clips.csv").exists()


def test_list_sequences(project_file, capsys):
    assert export_clips_csv.main(["-i", str(project_file), "--list-sequences"]) == 0
    assert " - Main" in capsys.readouterr().out


def test_invalid_xml_exits_with_error(tmp_path):
    path = tmp_path / "broken.xml"
    path.write_text("<project>", encoding="utf-8")
    assert export_clips_csv.main(["-i", str(path), "-o", str(tmp_path / "x.csv")]) == 1
    assert not (tmp_path / "x.csv").exists()


def test_missing_input(tmp_path):
    assert export_clips_csv.main(["-i", str(tmp_path / "nope.xml")]) == 2


def test_fps_option(project_file, tmp_path):
    out = tmp_path / "clips.csv"
    assert export_clips_csv.main(["-i", str(project_file), "-o", str(out), "--fps", "50"]) == 0
    assert "00:00:10 - 00:00:12" in out.read_text(encoding="utf-8")


def test_per_instance_csv(project_file, capsys):
    assert export_clips_csv.main(["-i", str(project_file), "--per-instance"]) == 0

    out = project_file.parent / "holiday_clip_instances.csv"
    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Track Type", "Track", "Name", "In", "Out", "Sequence"]
    assert rows[1:] == [
        ["Video", "1", "sunset", "00:00:00", "00:00:04", "Main"],
        ["Video", "1", "sunset", "00:00:20", "00:00:24", "Main"],
    ]
    assert "Wrote 2 clip instances" in capsys.readouterr().out
