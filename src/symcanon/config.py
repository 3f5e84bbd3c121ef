"""Settings that the canonicalizer reads while comparing Floats.

The only knob is the equality tolerance. When it is set, two Floats whose absolute
difference is below it are the same number: for ==, for collecting like terms,
and for dropping a Float that landed on the identity.

```
from symcanon import Float
from symcanon.config import settings

with settings(tolerance=1e-9):
    assert Float(0.1) + Float(0.2) == Float(0.3)
```

The default comes from the SYMCANON_TOLERANCE environment variable, read once at import,
and set_tolerance() changes it for the whole process. settings() overrides live in a
ContextVar so one thread (or asyncio task) overriding it never changes the answer in another.
"""

import os
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Iterator, Optional

ENV_TOLERANCE = "SYMCANON_TOLERANCE"


@dataclass(frozen=True)
class Settings:
    tolerance: Optional[float] = None

    def __post_init__(self):
        if self.tolerance is not None and not self.tolerance >= 0:
            raise ValueError(f"Tolerance must be a non-negative number, got {self.tolerance}")


def _from_env() -> Settings:
    raw = os.environ.get(ENV_TOLERANCE, "").strip()
    if not raw:
        return Settings()
    try:
        return Settings(tolerance=float(raw))
    except ValueError as exc:
        raise ValueError(f"{ENV_TOLERANCE}={raw!r} is not a valid tolerance") from exc


_default = _from_env()
_override: ContextVar[Optional[Settings]] = ContextVar("symcanon_settings", default=None)


def current_settings() -> Settings:
    override = _override.get()
    return _default if override is None else override


def get_tolerance() -> Optional[float]:
    return current_settings().tolerance


def set_tolerance(tolerance: Optional[float]) -> None:
    """Change the process-wide default tolerance.

    Every thread and task sees the new value, including ones started later, except inside
    a settings() block, which keeps its own value until it exits.
    """
    global _default
    _default = replace(_default, tolerance=tolerance)


@contextmanager
def settings(**changes) -> Iterator[Settings]:
    """Temporarily override settings, ex: with settings(tolerance=1e-12): ..."""
    new = replace(current_settings(), **changes)
    token = _override.set(new)
    try:
        yield new
    finally:
        _override.reset(token)
