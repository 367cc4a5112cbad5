"""SkinRoutine — personalized skincare routine generation service."""

__version__ = "1.0.0"
