"""Tests for pymimicscore.audio."""

import dataclasses
import logging

import numpy as np
import pytest

from pymimicscore.audio import Waveform, load_waveform
from pymimicscore.exceptions import AudioLoadError, InvalidWaveformError

from tests.fixtures import swelling_tone, tone, write_wav


class TestWaveform:
    """Construction and validation."""

    def test_from_list(self):
        w = Waveform.from_array([0.0, 0.5, -0.5], 8000)
        assert w.length == 3
        assert w.samples.dtype == np.float64
        assert w.duration == pytest.approx(3 / 8000)

    @pytest.mark.parametrize("rate", [0, -16000, 44100.5, "fast", None])
    def test_invalid_sample_rate(self, rate):
        with pytest.raises(InvalidWaveformError):
            Waveform.from_array(np.zeros(10), rate)

    def test_integral_float_rate_accepted(self):
        w = Waveform.from_array(np.zeros(10), 16000.0)
        assert w.sample_rate == 16000
        assert isinstance(w.sample_rate, int)

    def test_non_finite_samples_rejected(self):
        with pytest.raises(InvalidWaveformError, match="NaN"):
            Waveform.from_array(np.array([0.0, np.nan, 0.1]), 16000)

    def test_invalid_waveform_is_value_error(self):
        with pytest.raises(ValueError):
            Waveform.from_array(np.zeros((2, 2, 2)), 16000)

    def test_first_channel_of_2d(self):
        stereo = np.vstack([np.ones(5), -np.ones(5)])
        w = Waveform.from_array(stereo, 16000)
        np.testing.assert_array_equal(w.samples, np.ones(5))

    def test_first_channel_of_frames_by_channels(self):
        mono = tone(220.0, 1.0, 16000, amplitude=0.5)
        w = Waveform.from_array(np.column_stack([mono, np.zeros_like(mono)]), 16000)
        assert w.length == 16000
        np.testing.assert_array_equal(w.samples, mono)

    def test_soundfile_layout_matches_librosa_layout(self):
        data = np.column_stack([np.arange(8.0), -np.arange(8.0)])
        np.testing.assert_array_equal(
            Waveform.from_array(data, 16000).samples,
            Waveform.from_array(data.T, 16000).samples,
        )

    def test_empty_is_valid(self):
        w = Waveform.from_array(np.zeros(0), 16000)
        assert w.length == 0
        assert w.duration == 0.0
        assert w.peak == 0.0
        assert w.is_silent


class TestImmutability:
    """A waveform never changes after construction."""

    def test_samples_read_only(self):
        w = Waveform.from_array(np.zeros(4), 16000)
        with pytest.raises(ValueError):
            w.samples[0] = 1.0

    def test_fields_frozen(self):
        w = Waveform.from_array(np.zeros(4), 16000)
        with pytest.raises(dataclasses.FrozenInstanceError):
            w.sample_rate = 8000

    def test_source_array_not_shared(self):
        source = np.zeros(4)
        w = Waveform.from_array(source, 16000)
        source[0] = 1.0
        assert w.samples[0] == 0.0


class TestTransforms:
    """Reversal and truncation."""

    def test_reversed(self):
        w = Waveform.from_array([1.0, 2.0, 3.0], 16000)
        np.testing.assert_array_equal(w.reversed().samples, [3.0, 2.0, 1.0])
        assert w.reversed().sample_rate == 16000

    def test_reverse_twice_is_identity(self, voiced_waveform):
        np.testing.assert_array_equal(voiced_waveform.reversed().reversed().samples, voiced_waveform.samples)

    def test_reversed_leaves_original(self):
        w = Waveform.from_array([1.0, 2.0, 3.0], 16000)
        w.reversed()
        np.testing.assert_array_equal(w.samples, [1.0, 2.0, 3.0])

    def test_truncated(self, voiced_waveform):
        assert voiced_waveform.truncated(100).length == 100
        assert voiced_waveform.truncated(10**9) is voiced_waveform

    def test_time_conversions(self):
        w = Waveform.from_array(np.zeros(10), 16000)
        assert w.seconds_to_samples(0.5) == 8000
        assert w.samples_to_seconds(8000) == pytest.approx(0.5)


class TestLoadWaveform:
    """Loading from disk."""

    def test_load_native_rate(self, tmp_path):
        samples = swelling_tone(220.0, 0.5, 22050)
        path = write_wav(tmp_path / "ref.wav", samples, 22050)

        w = load_waveform(path)

        assert w.sample_rate == 22050
        assert w.length == samples.size
        np.testing.assert_allclose(w.samples, samples, atol=1e-6)

    def test_stereo_uses_first_channel(self, tmp_path):
        left = tone(220.0, 0.25, 16000, amplitude=0.5)
        path = write_wav(tmp_path / "stereo.wav", np.column_stack([left, np.zeros_like(left)]), 16000)

        w = load_waveform(path)

        np.testing.assert_allclose(w.samples, left, atol=1e-6)

    def test_truncates_to_max_duration(self, tmp_path, caplog):
        path = write_wav(tmp_path / "long.wav", tone(220.0, 2.0, 16000, amplitude=0.5), 16000)

        with caplog.at_level(logging.WARNING):
            w = load_waveform(path, max_duration=1.0)

        assert w.length == 16000
        assert "only the first 1.0s" in caplog.text

    def test_no_cap(self, tmp_path):
        path = write_wav(tmp_path / "long.wav", tone(220.0, 2.0, 16000, amplitude=0.5), 16000)
        assert load_waveform(path, max_duration=None).length == 32000

    def test_silent_file_warns(self, tmp_path, caplog):
        path = write_wav(tmp_path / "quiet.wav", np.zeros(8000), 16000)

        with caplog.at_level(logging.WARNING):
            w = load_waveform(path)

        assert w.is_silent
        assert "nearly silent" in caplog.text

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "broken.wav"
        path.write_text("this is not audio")

        with pytest.raises(AudioLoadError, match="broken.wav"):
            load_waveform(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(AudioLoadError):
            load_waveform(tmp_path / "nowhere.wav")
