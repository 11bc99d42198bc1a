"""Command line interface for propgen."""
