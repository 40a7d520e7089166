"""Build Notifier: recipient routing and subject composition for build notifications."""

__version__ = "1.0.0"
