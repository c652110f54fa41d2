"""Shared test doubles for the unit tests."""
