"""Tests for manifest parsing and dataset loading."""

import pytest

from thai_tts.exceptions import DatasetLoadError
from thai_tts.training.dataset import DatasetLoader, parse_manifest_line
from tests.conftest import write_dataset


def test_parse_manifest_line_rejoins_text_with_commas():
    record = parse_manifest_line("a.wav,hello, world,positive,warm,2.5,high")

    assert record.file_name == "a.wav"
    assert record.text == "hello, world"
    assert record.emotion_label == "positive"
    assert record.pitch == "warm"
    assert record.duration == "2.5"
    assert record.energy == "high"
    assert record.full_path is None


def test_parse_manifest_line_strips_line_ending():
    record = parse_manifest_line("a.wav,hello,neutral,low,1.0,low\r\n")
    assert record.energy == "low"


@pytest.mark.parametrize("line", ["", "a.wav", "a.wav,text,neutral,low,1.0"])
def test_parse_manifest_line_short_rows(line):
    assert parse_manifest_line(line) is None


def test_load_skips_header_and_malformed_rows(dataset_dir):
    records = DatasetLoader().load(dataset_dir)

    assert [r.file_name for r in records] == [
        "clip_001.wav", "clip_002.wav", "clip_003.wav", "clip_004.wav", "clip_005.wav",
    ]
    assert records[1].text == "ขอบคุณมาก, ครับ"
    assert all(r.full_path is not None and r.full_path.is_file() for r in records)


def test_load_drops_rows_without_audio(tmp_path):
    rows = [
        "file_name,text,emotion_label,pitch,duration,energy",
        "present.wav,one,neutral,low,1.0,low",
        "missing.wav,two,neutral,low,1.0,low",
    ]
    dataset = write_dataset(tmp_path / "ds", rows, ["present.wav"])

    records = DatasetLoader().load(dataset)

    assert [r.file_name for r in records] == ["present.wav"]


def test_load_resolves_basename_first(tmp_path):
    rows = [
        "file_name,text,emotion_label,pitch,duration,energy",
        "uploads/2024/clip.wav,text,neutral,low,1.0,low",
    ]
    dataset = write_dataset(tmp_path / "ds", rows, ["clip.wav"])

    records = DatasetLoader().load(dataset)

    assert len(records) == 1
    assert records[0].full_path == (dataset / "clip.wav").resolve()


def test_load_falls_back_to_verbatim_path(tmp_path):
    rows = [
        "file_name,text,emotion_label,pitch,duration,energy",
        "wavs/clip.wav,text,neutral,low,1.0,low",
    ]
    dataset = write_dataset(tmp_path / "ds", rows, [])
    (dataset / "wavs").mkdir()
    (dataset / "wavs" / "clip.wav").write_bytes(b"audio")

    records = DatasetLoader().load(dataset)

    assert records[0].full_path == (dataset / "wavs" / "clip.wav").resolve()


def test_load_skips_empty_text(tmp_path):
    rows = [
        "file_name,text,emotion_label,pitch,duration,energy",
        "a.wav,,neutral,low,1.0,low",
    ]
    dataset = write_dataset(tmp_path / "ds", rows, ["a.wav"])

    assert DatasetLoader().load(dataset) == []


def test_load_missing_manifest_raises(tmp_path):
    with pytest.raises(DatasetLoadError):
        DatasetLoader().load(tmp_path / "does_not_exist")
