"""Fingerprint capture archival service."""
