import numpy as np
import soundfile as sf

from tonal_tuner.core.config import TunerConfig
from tonal_tuner.main import build_config, format_reading, main, parse_arguments
from tonal_tuner.note_matcher import NoteMatcher
from tonal_tuner.note_types import TunerReading
from tonal_tuner.tuning_classifier import TuningClassifier
from tonal_tuner.tunings import UKULELE_STANDARD


def test_parse_defaults():
    args = parse_arguments([])
    assert args.tuning is None
    assert args.target is None
    assert not args.headless
    assert not args.no_filter


def test_build_config_applies_overrides():
    args = parse_arguments(["--tuning", "guitar", "--frame-size", "4096", "--no-filter"])
    config = build_config(args, TunerConfig(tolerance_hz=0.5))
    assert config.tuning == "guitar"
    assert config.frame_size == 4096
    assert config.lowpass_cutoff_hz is None
    assert config.tolerance_hz == 0.5


def test_format_reading():
    match = NoteMatcher(UKULELE_STANDARD).match(439.5)
    reading = TunerReading(
        status=TuningClassifier().classify(match),
        frequency=439.5,
        match=match,
        needle_angle=-1.0,
        confirm=True,
        timestamp=0.0,
    )
    line = format_reading(reading)
    assert "439.50 Hz" in line
    assert "A4" in line
    assert "-0.50 Hz" in line
    assert "in tune" in line
    assert line.endswith("*ding*")


def _write_tone(path, frequency=440.0, sample_rate=44000, seconds=0.25):
    t = np.arange(int(sample_rate * seconds)) / sample_rate
    sf.write(str(path), 0.5 * np.sin(2 * np.pi * frequency * t), sample_rate)


def test_headless_wav_run(tmp_path, capsys):
    wav = tmp_path / "a4.wav"
    _write_tone(wav)
    code = main(["--wav", str(wav), "--headless", "--config-dir", str(tmp_path / "cfg")])
    assert code == 0
    out = capsys.readouterr().out
    assert "A4" in out
    assert (tmp_path / "cfg" / "tuner.json").exists()


def test_unknown_target_fails(tmp_path):
    wav = tmp_path / "a4.wav"
    _write_tone(wav)
    code = main(
        ["--wav", str(wav), "--headless", "--target", "B9", "--config-dir", str(tmp_path)]
    )
    assert code == 1


def test_format_reading_shows_cents():
    match = NoteMatcher(UKULELE_STANDARD).match(445.0)
    reading = TunerReading(
        status=TuningClassifier().classify(match),
        frequency=445.0,
        match=match,
        needle_angle=10.0,
        confirm=False,
        timestamp=0.0,
    )
    # 1200 * log2(445 / 440) is about 19.6 cents
    assert "+20 cents" in format_reading(reading)


def test_parse_wav_options():
    args = parse_arguments(["--wav", "tone.wav", "--gain", "2.5", "--fast"])
    assert args.gain == 2.5
    assert args.fast
    assert parse_arguments([]).gain == 1.0


def test_fast_wav_run(tmp_path, capsys):
    wav = tmp_path / "a4.wav"
    _write_tone(wav)
    code = main(["--wav", str(wav), "--fast", "--config-dir", str(tmp_path / "cfg")])
    assert code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    # 0.25 s at 44000 Hz holds five full 2048-sample frames
    assert len(lines) == 5
    assert all("A4" in line and "cents" in line for line in lines)


def test_fast_wav_run_applies_gain(tmp_path, capsys):
    wav = tmp_path / "a4.wav"
    _write_tone(wav)
    # Attenuated below the silence gate, so nothing is reported
    code = main(
        ["--wav", str(wav), "--fast", "--gain", "0.001", "--config-dir", str(tmp_path / "cfg")]
    )
    assert code == 0
    assert "A4" not in capsys.readouterr().out


def test_whole_number_float_in_config_file(tmp_path, capsys):
    wav = tmp_path / "a4.wav"
    _write_tone(wav)
    cfg = tmp_path / "cfg"
    cfg.mkdir()
    (cfg / "tuner.json").write_text('{"history_size": 3.0}')
    assert main(["--wav", str(wav), "--fast", "--config-dir", str(cfg)]) == 0


def test_wrongly_typed_config_file_fails_cleanly(tmp_path):
    wav = tmp_path / "a4.wav"
    _write_tone(wav)
    cfg = tmp_path / "cfg"
    cfg.mkdir()
    (cfg / "tuner.json").write_text('{"history_size": "five"}')
    assert main(["--wav", str(wav), "--fast", "--config-dir", str(cfg)]) == 1
