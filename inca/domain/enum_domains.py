"""Registry of categorical domains shared with the incentive backend.

The backend stores categorical fields (plan types, statuses, roles, ...) as
small integers. Each ``EnumDomain`` is a closed, bijective table between the
symbolic names used by the application and those wire codes.

Dependencies:
    - Standard library only; tables are static data.

Call context:
    - ``inca.domain.field_bindings`` binds field names to these domains.
    - ``inca.domain.transcoder`` performs the lookups during payload walks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

# Bump when a table or pair changes so persisted payloads can be traced back.
DOMAIN_TABLE_VERSION = 3

DomainPairs = Sequence[Tuple[str, int]]


@dataclass(frozen=True)
class EnumDomain:
    """Bijective symbol/code table for one categorical backend field.

    Attributes:
        name: Stable domain identifier (``"DealStatus"``).
        pairs: Ordered ``(symbol, code)`` pairs as declared by the backend.
    """

    name: str
    pairs: Tuple[Tuple[str, int], ...]
    _by_symbol: Dict[str, int] = field(init=False, repr=False, compare=False)
    _by_code: Dict[int, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("EnumDomain name must be a non-empty string.")
        pairs = tuple((str(symbol), int(code)) for symbol, code in self.pairs)
        if not pairs:
            raise ValueError(f"EnumDomain '{self.name}' has no pairs.")
        by_symbol: Dict[str, int] = {}
        by_code: Dict[int, str] = {}
        for symbol, code in pairs:
            if symbol in by_symbol:
                raise ValueError(f"{self.name}: duplicate symbol '{symbol}'")
            if code in by_code:
                raise ValueError(f"{self.name}: duplicate code {code}")
            by_symbol[symbol] = code
            by_code[code] = symbol
        object.__setattr__(self, "pairs", pairs)
        object.__setattr__(self, "_by_symbol", by_symbol)
        object.__setattr__(self, "_by_code", by_code)

    @property
    def symbols(self) -> Tuple[str, ...]:
        return tuple(symbol for symbol, _ in self.pairs)

    @property
    def codes(self) -> Tuple[int, ...]:
        return tuple(code for _, code in self.pairs)

    def code_for(self, symbol: str) -> Optional[int]:
        """Return the wire code for ``symbol`` or ``None`` when unmapped."""
        if not isinstance(symbol, str):
            return None
        return self._by_symbol.get(symbol)

    def symbol_for(self, code: int) -> Optional[str]:
        """Return the symbol for ``code`` or ``None`` when unmapped."""
        if isinstance(code, bool):
            return None
        if isinstance(code, float):
            if not code.is_integer():
                return None
            code = int(code)
        if not isinstance(code, int):
            return None
        return self._by_code.get(code)


# Static, versioned domain tables. Codes follow the backend enums.
DOMAIN_SPECS: Mapping[str, DomainPairs] = {
    "IncentivePlanType": (
        ("TargetBased", 0),
        ("RoleBased", 1),
        ("ProjectBased", 2),
        ("KickerBased", 3),
        ("TieredBased", 4),
    ),
    "PeriodType": (
        ("None", 0),
        ("Monthly", 1),
        ("Quarterly", 2),
        ("HalfYearly", 3),
        ("Yearly", 4),
        ("Custom", 5),
    ),
    "MetricType": (
        ("BookingValue", 0),
        ("UnitsSold", 1),
        ("Revenue", 2),
    ),
    "TargetType": (
        ("SalaryBased", 0),
        ("MetricBased", 1),
    ),
    "IncentiveCalculationType": (
        ("FixedAmount", 0),
        ("PercentageOnTarget", 1),
    ),
    "AwardType": (
        ("Cash", 0),
        ("Gift", 1),
    ),
    "CurrencyType": (
        ("Rupees", 0),
        ("Dollar", 1),
    ),
    "UserRole": (
        ("ADMIN", 0),
        ("MANAGER", 1),
        ("AGENT", 2),
        ("READONLY", 3),
    ),
    "IncentivePlanStatus": (
        ("DRAFT", 0),
        ("ACTIVE", 1),
        ("INACTIVE", 2),
        ("EXPIRED", 3),
    ),
    "RewardType": (
        ("FIXED", 0),
        ("PERCENTAGE", 1),
        ("POINTS", 2),
    ),
    "DealStatus": (
        ("New", 0),
        ("OnHold", 1),
        ("Cancelled", 2),
        ("Won", 3),
        ("Lost", 4),
        ("PartiallyPaid", 5),
        ("FullyPaid", 6),
    ),
    "WorkflowStatus": (
        ("DRAFT", 0),
        ("ACTIVE", 1),
        ("INACTIVE", 2),
    ),
    "WorkflowStepType": (
        ("APPROVAL", 0),
        ("NOTIFICATION", 1),
        ("CALCULATION", 2),
        ("CONDITION", 3),
        ("ACTION", 4),
    ),
    "WorkflowInstanceStatus": (
        ("RUNNING", 0),
        ("COMPLETED", 1),
        ("FAILED", 2),
        ("CANCELLED", 3),
        ("WAITING", 4),
    ),
    "WorkflowStepExecutionStatus": (
        ("PENDING", 0),
        ("COMPLETED", 1),
        ("FAILED", 2),
        ("SKIPPED", 3),
    ),
    "PayoutStatus": (
        ("PENDING", 0),
        ("APPROVED", 1),
        ("REJECTED", 2),
        ("PAID", 3),
    ),
}


class EnumRegistry:
    """Read-only lookup service over a fixed set of ``EnumDomain`` tables."""

    def __init__(self, domains: Iterable[EnumDomain]) -> None:
        table: Dict[str, EnumDomain] = {}
        for domain in domains:
            if domain.name in table:
                raise ValueError(f"Duplicate domain '{domain.name}'")
            table[domain.name] = domain
        self._domains = table

    @classmethod
    def from_specs(cls, specs: Mapping[str, DomainPairs]) -> "EnumRegistry":
        return cls(EnumDomain(name, tuple(pairs)) for name, pairs in specs.items())

    @classmethod
    def default(cls) -> "EnumRegistry":
        """Build the registry for the current backend domain tables."""
        return cls.from_specs(DOMAIN_SPECS)

    def names(self) -> Tuple[str, ...]:
        return tuple(self._domains)

    def domains(self) -> Iterable[EnumDomain]:
        return self._domains.values()

    def domain(self, name: str) -> EnumDomain:
        """Return the named domain.

        Raises:
            KeyError: If ``name`` is not registered. This is a wiring error,
                not a payload condition.
        """
        try:
            return self._domains[name]
        except KeyError:
            raise KeyError(f"Unknown enum domain '{name}'") from None

    def symbol_to_code(self, domain: str | EnumDomain, symbol: str) -> Optional[int]:
        return self._coerce(domain).code_for(symbol)

    def code_to_symbol(self, domain: str | EnumDomain, code: int) -> Optional[str]:
        return self._coerce(domain).symbol_for(code)

    def _coerce(self, domain: str | EnumDomain) -> EnumDomain:
        if isinstance(domain, EnumDomain):
            return domain
        return self.domain(domain)


DEFAULT_REGISTRY = EnumRegistry.default()


__all__ = [
    "DEFAULT_REGISTRY",
    "DOMAIN_SPECS",
    "DOMAIN_TABLE_VERSION",
    "EnumDomain",
    "EnumRegistry",
]
