"""Shared helpers for covsummary."""
