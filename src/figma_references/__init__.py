"""Find Figma designs linked from the pull requests behind a file's git history."""

__version__ = "0.1.0"
