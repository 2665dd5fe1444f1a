"""Shared constants for treehash."""
