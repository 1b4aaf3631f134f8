"""Tests for househunt."""
