"""Workflow compilers for ActionForge."""
