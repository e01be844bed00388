from __future__ import annotations
import re
from typing import Any, Mapping, Optional, Sequence

from .errors import SubstitutionError

# %% or one conversion; group 1 is the conversion letter
_CONVERSION = re.compile(r"%(?:%|[-+ 0#]*\d*(?:\.\d+)?([a-zA-Z]))")
_INTEGER = frozenset("diu")
_FLOAT = frozenset("eEfFgG")


def _coerce(value: Any, conversion: str) -> Any:
    # Numeric strings are accepted for numeric conversions, as vsprintf does.
    if not isinstance(value, str) or (conversion not in _INTEGER and conversion not in _FLOAT):
        return value
    raw = value.strip()
    try:
        number: float = int(raw)
    except ValueError:
        try:
            number = float(raw)
        except ValueError:
            return value
    return int(number) if conversion in _INTEGER else float(number)


def format_positional(phrase: str, args: Sequence[Any] = (), *, key: Optional[str] = None) -> str:
    """Apply printf-style placeholders (``%s``, ``%d``, ``%%``...) in order.

    Arguments beyond the number of placeholders are ignored, so a translation
    may drop one. With no arguments the phrase is returned as-is.
    """
    if isinstance(args, (str, bytes)):
        args = (args,)
    if not args:
        return phrase
    conversions = [m.group(1) for m in _CONVERSION.finditer(phrase) if m.group(1)]
    if len(args) < len(conversions):
        raise SubstitutionError(phrase, f"expected {len(conversions)} arguments, got {len(args)}", key)
    values = tuple(_coerce(value, conv) for value, conv in zip(args, conversions))
    try:
        return phrase % values
    except (TypeError, ValueError) as exc:
        raise SubstitutionError(phrase, str(exc), key) from exc


def replace_tokens(phrase: str, tokens: Optional[Mapping[str, Any]] = None) -> str:
    # Longest token wins; replaced text is not scanned again.
    if not tokens:
        return phrase
    keys = sorted((k for k in tokens if k), key=len, reverse=True)
    if not keys:
        return phrase
    pattern = re.compile("|".join(re.escape(k) for k in keys))
    return pattern.sub(lambda m: str(tokens[m.group(0)]), phrase)
