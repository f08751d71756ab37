"""CLI commands for ActionForge."""
