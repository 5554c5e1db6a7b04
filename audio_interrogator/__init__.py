"""Audio device discovery and normalization across PortAudio and ALSA."""

__version__ = "0.1.0"
