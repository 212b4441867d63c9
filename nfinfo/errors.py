# nfinfo/errors.py
from __future__ import annotations


class AbortOperationError(Exception):
    """User-facing failure: the command stops and prints the message."""
