"""Test helpers for proofmark."""
