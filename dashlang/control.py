"""Control signals produced by executing a statement.

A statement execution yields ``None`` when control simply falls through to
the next statement, or one of the signals below. The signal is consumed by
the statement's dynamic parent: a ``while`` loop, an ``if`` branch, a call
site or the top-level driver.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class BreakSignal:
    def __repr__(self) -> str:
        return 'Break'


@dataclass(frozen=True)
class ContinueSignal:
    def __repr__(self) -> str:
        return 'Continue'


@dataclass(frozen=True)
class ReturnSignal:
    value: str


BREAK = BreakSignal()
CONTINUE = ContinueSignal()

LoopControl = Optional[Union[BreakSignal, ContinueSignal, ReturnSignal]]
