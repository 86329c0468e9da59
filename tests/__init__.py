"""Test suite for mandalagen."""
