"""Revision diffing, provenance tracking and the per-field lifecycle."""

from .diffing import AnnotatedText, compute_diff
from .field import RevisableField

__all__ = ["AnnotatedText", "RevisableField", "compute_diff"]
