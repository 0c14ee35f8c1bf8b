"""Persistence for user-accepted words."""

from .word_store import CustomWordStore

__all__ = ["CustomWordStore"]
