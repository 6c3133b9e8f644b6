"""Tests for sbo_core."""
