"""Command-line interface for svcinstall."""
