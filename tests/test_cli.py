"""Tests for the command-line interface."""

import sys

import numpy as np
import soundfile as sf
from typer.testing import CliRunner

from notegrid.cli import app

runner = CliRunner()


def write_wav(path, seconds=1.0, sr=22050):
    t = np.arange(int(sr * seconds)) / sr
    sf.write(str(path), (0.8 * np.sin(2 * np.pi * 220.0 * t)).astype(np.float32), sr)
    return path


class TestInfo:

    def test_info(self, tmp_path):
        path = write_wav(tmp_path / "tone.wav")
        result = runner.invoke(app, ["info", str(path)])

        assert result.exit_code == 0
        assert "Sample rate: 22050 Hz" in result.output
        assert "Samples: 22,050" in result.output
        assert "Windows: 1 x 43844 samples" in result.output
        assert "Frames: 86 at 86 fps" in result.output

    def test_info_long_audio(self, tmp_path):
        path = write_wav(tmp_path / "long.wav", seconds=5.0)
        result = runner.invoke(app, ["info", str(path)])

        # 110250 + 3840 padded samples, hop 36164
        assert result.exit_code == 0
        assert "Windows: 3 x 43844 samples" in result.output

    def test_info_missing_file(self, tmp_path):
        result = runner.invoke(app, ["info", str(tmp_path / "missing.wav")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_info_invalid_overlap(self, tmp_path):
        path = write_wav(tmp_path / "tone.wav")
        result = runner.invoke(app, ["info", str(path), "--overlap", "200"])
        assert result.exit_code == 1
        assert "Invalid hop size" in result.output


class TestTranscribe:

    def test_missing_input(self, tmp_path):
        result = runner.invoke(
            app, ["transcribe", str(tmp_path / "missing.wav"), "-m", str(tmp_path / "m.onnx")]
        )
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_missing_model(self, tmp_path):
        path = write_wav(tmp_path / "tone.wav")
        result = runner.invoke(app, ["transcribe", str(path), "-m", str(tmp_path / "m.onnx")])

        assert result.exit_code == 1
        assert "Model file not found" in result.output

    def test_invalid_threshold(self, tmp_path):
        path = write_wav(tmp_path / "tone.wav")
        result = runner.invoke(
            app,
            ["transcribe", str(path), "-m", str(tmp_path / "m.onnx"), "--note-threshold", "2"],
        )
        assert result.exit_code == 1
        assert "note_threshold" in result.output

    def test_missing_onnxruntime(self, tmp_path, monkeypatch):
        path = write_wav(tmp_path / "tone.wav")
        model = tmp_path / "m.onnx"
        model.write_bytes(b"")
        # A None entry makes `import onnxruntime` raise ImportError
        monkeypatch.setitem(sys.modules, "onnxruntime", None)

        result = runner.invoke(app, ["transcribe", str(path), "-m", str(model)])

        assert result.exit_code == 1
        assert "pip install notegrid[onnx]" in result.output
