"""Canned model replies for tests."""
