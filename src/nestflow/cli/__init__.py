"""Command line interface for Nestflow."""
