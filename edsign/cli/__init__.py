"""Command-line interface for edsign."""
