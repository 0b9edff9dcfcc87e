"""Text and URL helpers."""
