"""Event-driven controller for a three-floor elevator, driven over UDP."""

__version__ = "0.1.0"