"""Command line interface for ActionForge."""
