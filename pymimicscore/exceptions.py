class MissingInputError(Exception):
    """Raised when a reference or candidate recording is absent."""


class InvalidWaveformError(ValueError):
    """Raised when sample data or sample rate cannot form a valid waveform."""


class AudioLoadError(Exception):
    """Raised when audio file cannot be loaded or is invalid."""
