from __future__ import annotations
import time
import logging
from functools import wraps
from typing import Callable, Optional, ParamSpec, TypeVar

P = ParamSpec("P")
T = TypeVar("T")

logger = logging.getLogger("phrase_catalog")


def _locale_of(args: tuple, kwargs: dict) -> Optional[str]:
    # Store methods take the locale right after self.
    if "locale" in kwargs:
        return kwargs["locale"]
    return args[1] if len(args) > 1 and isinstance(args[1], str) else None


def log_if_slow(threshold_ms: int = 200) -> Callable[[Callable[P, T]], Callable[P, T]]:
    # Catalog I/O may wait on disk or on another writer's lock; report only slow calls.
    def deco(fn: Callable[P, T]) -> Callable[P, T]:
        @wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                took_ms = int((time.perf_counter() - start) * 1000)
                if took_ms >= threshold_ms:
                    logger.info("slow_op: %s locale=%s took %d ms", fn.__qualname__, _locale_of(args, kwargs), took_ms)
        return wrapper
    return deco
