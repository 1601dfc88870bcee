"""Logging and metrics for vargraph."""
