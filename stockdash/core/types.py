"""Shared type aliases for readability and contract enforcement.

Timestamps, prices and symbols travel through every layer of the pipeline.
Aliases defined here keep provider epoch seconds from being mixed up with
prices or volumes.
"""
from __future__ import annotations

from typing import Any, Mapping, NewType, Optional, Sequence, TypeAlias

Timestamp = NewType("Timestamp", int)
Symbol = NewType("Symbol", str)

JSONLike: TypeAlias = Mapping[str, Any]
NumericSequence: TypeAlias = Sequence[float]
OptionalSeries: TypeAlias = list[Optional[float]]
