"""Tests for the synthesis engine."""

import numpy as np
import pytest
import soundfile as sf

from thai_tts.config import SynthesisConfig
from thai_tts.core.synthesis import SynthesisEngine
from thai_tts.exceptions import ModelNotFoundError, SynthesisError


@pytest.fixture
def engine(registry):
    return SynthesisEngine(registry=registry, rng=np.random.default_rng(0))


def test_default_voice(engine):
    result = engine.synthesize("hello there world")

    assert result.voice == "default"
    assert result.sample_rate == 24000
    assert result.duration == pytest.approx(0.6)
    assert len(result.audio) == int(result.duration * result.sample_rate)
    assert result.audio.dtype == np.float32
    assert np.max(np.abs(result.audio)) <= 0.3 + 1e-6


def test_speed_shortens_duration(engine):
    assert engine.synthesize("one two", speed=2.0).duration == pytest.approx(0.2)


@pytest.mark.parametrize("text", ["", "   "])
def test_empty_text_rejected(engine, text):
    with pytest.raises(SynthesisError):
        engine.synthesize(text)


def test_unknown_voice(engine):
    with pytest.raises(ModelNotFoundError):
        engine.synthesize("hello", voice="nobody")


def test_trained_voice(engine, registry, trained_model):
    assert trained_model.id in engine.voice_ids()

    result = engine.synthesize("สวัสดี ครับ", voice=trained_model.id)

    assert result.voice == trained_model.id
    assert result.voice_characteristics == trained_model.voice_characteristics.to_dict()


def test_trained_voice_missing(engine):
    with pytest.raises(ModelNotFoundError):
        engine.synthesize_with_trained_voice("hi", "missing_00000000")


def test_list_voices(engine, trained_model):
    voices = engine.list_voices()

    assert [v["id"] for v in voices["default"]] == ["default", "male-1", "female-1", "thai-1"]
    assert [v["id"] for v in voices["trained"]] == [trained_model.id]
    assert len(voices["all"]) == 5


def test_reference_audio_clones(engine, tmp_path):
    result = engine.synthesize("target text", reference_audio=tmp_path / "ref.wav", reference_text="ref")

    assert result.voice == "cloned"
    assert 220 <= result.voice_characteristics["pitch"] <= 320
    assert 0.9 <= result.voice_characteristics["speed"] <= 1.1


def test_clone_requires_all_inputs(engine):
    with pytest.raises(SynthesisError):
        engine.clone_voice("ref.wav", None, "target")


def test_multi_speech(engine):
    results = engine.multi_speech([
        {"id": "ok", "text": "hello"},
        {"text": ""},
        {"text": "hi", "voice": "nobody"},
        {"text": "hi", "reference_audio": "ref.wav", "reference_text": "ref"},
    ])

    assert [r["success"] for r in results] == [True, False, False, True]
    assert results[0]["id"] == "ok"
    assert results[1]["id"] == "speech_1"
    assert "required" in results[1]["error"]


def test_models(engine):
    assert [m.name for m in engine.get_models()] == ["v1"]

    engine.set_model("v2")

    assert engine.config.model == "v2"
    assert {m.type for m in engine.get_models()} == {"standard", "ipa"}
    with pytest.raises(ModelNotFoundError):
        engine.load_model("v3")


def test_estimate_duration():
    assert SynthesisEngine.estimate_duration("") == pytest.approx(0.2)
    assert SynthesisEngine.estimate_duration("a b c d", speed=0.5) == pytest.approx(1.6)


def test_save_wav(tmp_path):
    engine = SynthesisEngine(config=SynthesisConfig(sample_rate=16000))
    result = engine.synthesize("hello world")

    path = engine.save_wav(result, tmp_path / "out" / "hello.wav")

    info = sf.info(str(path))
    assert info.samplerate == 16000
    assert info.frames == len(result.audio)


def test_result_to_dict(engine):
    data = engine.synthesize("hello").to_dict()
    assert data["voice"] == "default"
    assert data["format"] == "wav"
    assert "audio" not in data


@pytest.mark.parametrize("speed", [-1.0, -0.5])
def test_clone_rejects_negative_speed(engine, speed):
    with pytest.raises(SynthesisError, match="Speed must be positive"):
        engine.clone_voice("ref.wav", "ref", "target text", speed=speed)


def test_multi_speech_reports_negative_clone_speed(engine):
    results = engine.multi_speech([
        {"text": "hi", "reference_audio": "ref.wav", "reference_text": "ref", "speed": -1.0},
    ])

    assert results[0]["success"] is False
    assert "Speed must be positive" in results[0]["error"]


def test_trained_voice_rejects_negative_speed(engine, trained_model):
    with pytest.raises(SynthesisError):
        engine.synthesize_with_trained_voice("hi", trained_model.id, speed=-2.0)
