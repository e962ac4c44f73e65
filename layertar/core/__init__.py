"""Streaming tar iteration, lookup and safe extraction."""
