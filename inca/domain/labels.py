"""Human-readable labels for enum-domain values."""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from .enum_domains import DEFAULT_REGISTRY, EnumRegistry

# Labels that do not follow the generic word-splitting rule.
LABEL_OVERRIDES: Mapping[str, Mapping[str, str]] = {
    "UserRole": {"READONLY": "Read Only"},
    "IncentiveCalculationType": {"PercentageOnTarget": "Percentage on Target"},
    "DealStatus": {"OnHold": "On Hold"},
}

_CAMEL_SPLIT = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def humanize_symbol(symbol: str) -> str:
    """``HalfYearly`` -> ``Half Yearly``, ``CLOSED_WON`` -> ``Closed Won``."""
    text = symbol.replace("_", " ").strip()
    if text.isupper():
        return " ".join(word.capitalize() for word in text.split())
    return _CAMEL_SPLIT.sub(" ", text)


def label_for(
    domain_name: str,
    value: Any,
    *,
    registry: Optional[EnumRegistry] = None,
) -> str:
    """Return a display label for a symbol or wire code of ``domain_name``.

    Numeric inputs (including numeric strings) are treated as wire codes and
    render as ``"Unknown"`` when unmapped; other unmapped values are returned
    as ``str(value)``.
    """
    domain = (registry or DEFAULT_REGISTRY).domain(domain_name)
    symbol: Optional[str] = None
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value.strip())
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        symbol = domain.symbol_for(value)
        if symbol is None:
            return "Unknown"
    elif isinstance(value, str) and domain.code_for(value) is not None:
        symbol = value
    if symbol is None:
        return "" if value is None else str(value)
    override = LABEL_OVERRIDES.get(domain_name, {}).get(symbol)
    return override or humanize_symbol(symbol)


__all__ = ["LABEL_OVERRIDES", "humanize_symbol", "label_for"]
