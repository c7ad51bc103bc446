"""
Backend Operation Outcomes

Every GrowiClient operation returns exactly one of two values:

- ``Success(value)``: the operation produced its payload.
- ``Failure(message)``: the operation failed; ``message`` is human-readable
  and carries whatever diagnostic detail was available.

The union replaces loosely-typed ``{"ok": ..., "error": ...}`` records, so a
result can never carry both a payload and an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    message: str


Outcome = Union[Success[T], Failure]
