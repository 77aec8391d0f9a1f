"""EduTrack account and activity service."""

__version__ = "1.0.0"
