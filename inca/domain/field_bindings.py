"""Field-name bindings and context-based disambiguation for enum domains.

Most categorical fields have a unique name (``planType``). A few names are
reused across unrelated domains (``status``, ``type``); for those the resolver
walks an ordered rule list and picks the first rule whose marker occurs in the
field name or in one of the enclosing keys.

The rule order is part of the wire contract. Markers that are substrings of
each other (``workflowstep`` / ``workflow``) rely on the more specific rule
being listed first.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .enum_domains import DEFAULT_REGISTRY, EnumDomain, EnumRegistry

# Bump together with any change to rule order or markers.
BINDING_TABLE_VERSION = 3

_LOG = logging.getLogger(__name__)
_NON_ALNUM = re.compile(r"[^0-9a-z]+")


def normalize_key(key: object) -> str:
    """Lower-case ``key`` and drop separators (``workflow_steps`` -> ``workflowsteps``)."""
    return _NON_ALNUM.sub("", str(key).lower())


@dataclass(frozen=True)
class ContextRule:
    """One priority slot of an ambiguous binding."""

    markers: Tuple[str, ...]
    domain: EnumDomain

    def __post_init__(self) -> None:
        markers = tuple(normalize_key(marker) for marker in self.markers)
        if not markers or not all(markers):
            raise ValueError(f"ContextRule for {self.domain.name} needs markers")
        object.__setattr__(self, "markers", markers)

    def matches(self, keys: Iterable[str]) -> bool:
        return any(marker in key for key in keys for marker in self.markers)


@dataclass(frozen=True)
class FieldBinding:
    """Binding of a field name to one domain or to ordered context rules."""

    field_name: str
    domain: Optional[EnumDomain] = None
    rules: Tuple[ContextRule, ...] = ()

    def __post_init__(self) -> None:
        if (self.domain is None) == (not self.rules):
            # exactly one of domain / rules
            raise ValueError(
                f"Binding '{self.field_name}' needs either a domain or context rules"
            )

    @property
    def ambiguous(self) -> bool:
        return self.domain is None


RuleSpec = Sequence[Tuple[Sequence[str], str]]


# Exact field names with a single domain.
UNAMBIGUOUS_FIELDS: Mapping[str, str] = {
    "planType": "IncentivePlanType",
    "periodType": "PeriodType",
    "metricType": "MetricType",
    "targetType": "TargetType",
    "calculationType": "IncentiveCalculationType",
    "awardType": "AwardType",
    "currencyType": "CurrencyType",
    "role": "UserRole",
}

# Reused field names, rules listed from most to least specific.
AMBIGUOUS_FIELDS: Mapping[str, RuleSpec] = {
    "status": (
        (("workflowStep", "stepExecution", "step", "history"), "WorkflowStepExecutionStatus"),
        (("workflowInstance", "instance"), "WorkflowInstanceStatus"),
        (("workflow",), "WorkflowStatus"),
        (("payout",), "PayoutStatus"),
        (("deal",), "DealStatus"),
        (("incentivePlan", "plan"), "IncentivePlanStatus"),
    ),
    "type": (
        (("workflowStep", "step"), "WorkflowStepType"),
        (("reward",), "RewardType"),
    ),
}


class DisambiguationResolver:
    """Select the enum domain for a field name in a traversal context."""

    def __init__(self, bindings: Iterable[FieldBinding]) -> None:
        table: Dict[str, FieldBinding] = {}
        for binding in bindings:
            if binding.field_name in table:
                raise ValueError(f"Duplicate binding for '{binding.field_name}'")
            table[binding.field_name] = binding
        self._bindings = table

    @classmethod
    def from_specs(
        cls,
        registry: EnumRegistry,
        unambiguous: Mapping[str, str],
        ambiguous: Mapping[str, RuleSpec],
    ) -> "DisambiguationResolver":
        bindings = [
            FieldBinding(name, domain=registry.domain(domain_name))
            for name, domain_name in unambiguous.items()
        ]
        for name, rules in ambiguous.items():
            bindings.append(
                FieldBinding(
                    name,
                    rules=tuple(
                        ContextRule(tuple(markers), registry.domain(domain_name))
                        for markers, domain_name in rules
                    ),
                )
            )
        return cls(bindings)

    @classmethod
    def default(cls, registry: Optional[EnumRegistry] = None) -> "DisambiguationResolver":
        """Build the resolver used by the default transcoder."""
        return cls.from_specs(
            registry or DEFAULT_REGISTRY, UNAMBIGUOUS_FIELDS, AMBIGUOUS_FIELDS
        )

    def binding_for(self, field_name: str) -> Optional[FieldBinding]:
        return self._bindings.get(field_name)

    def is_categorical(self, field_name: str) -> bool:
        return field_name in self._bindings

    def resolve(
        self, field_name: str, context: Sequence[str] = ()
    ) -> Optional[EnumDomain]:
        """Return the domain for ``field_name`` or ``None`` when unresolved.

        Args:
            field_name: Key being transcoded.
            context: Enclosing keys, nearest first. Caller hints (such as URL
                path segments) may be appended after the structural keys.

        Returns:
            The bound domain, the first matching rule's domain for ambiguous
            names, or ``None``.
        """
        binding = self._bindings.get(field_name)
        if binding is None:
            return None
        if binding.domain is not None:
            return binding.domain

        keys = [normalize_key(field_name)]
        keys.extend(normalize_key(key) for key in context)
        for rule in binding.rules:
            if rule.matches(keys):
                return rule.domain
        _LOG.debug("Unresolved field '%s' in context %s", field_name, list(context))
        return None


DEFAULT_RESOLVER = DisambiguationResolver.default()


__all__ = [
    "AMBIGUOUS_FIELDS",
    "BINDING_TABLE_VERSION",
    "DEFAULT_RESOLVER",
    "ContextRule",
    "DisambiguationResolver",
    "FieldBinding",
    "UNAMBIGUOUS_FIELDS",
    "normalize_key",
]
