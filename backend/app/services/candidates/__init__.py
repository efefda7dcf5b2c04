"""Candidate registration services."""
