"""
Custom exceptions for Thai TTS Studio.
"""


class ThaiTTSError(Exception):
    """Base exception for Thai TTS Studio."""
    pass


class DatasetLoadError(ThaiTTSError):
    """Dataset manifest could not be read."""
    pass


class PreprocessError(ThaiTTSError):
    """A single audio sample could not be preprocessed."""
    pass


class NoTrainingDataError(ThaiTTSError):
    """Training was requested without any training samples."""
    pass


class TrainingError(ThaiTTSError):
    """Model training failed."""
    pass


class ModelNotFoundError(ThaiTTSError):
    """Requested voice model not found."""
    pass


class SynthesisError(ThaiTTSError):
    """Speech synthesis failed."""
    pass


class ConfigurationError(ThaiTTSError):
    """Configuration error."""
    pass
