from __future__ import annotations

import pytest

from inca.domain.enum_domains import (
    DEFAULT_REGISTRY,
    DOMAIN_SPECS,
    EnumDomain,
    EnumRegistry,
)


def test_default_registry_contains_every_declared_domain() -> None:
    assert set(DEFAULT_REGISTRY.names()) == set(DOMAIN_SPECS)


@pytest.mark.parametrize("name", sorted(DOMAIN_SPECS))
def test_default_domains_are_bijective(name: str) -> None:
    domain = DEFAULT_REGISTRY.domain(name)
    assert len(set(domain.symbols)) == len(domain.pairs)
    assert len(set(domain.codes)) == len(domain.pairs)
    for symbol, code in domain.pairs:
        assert DEFAULT_REGISTRY.symbol_to_code(name, symbol) == code
        assert DEFAULT_REGISTRY.code_to_symbol(name, code) == symbol


def test_duplicate_symbol_rejected() -> None:
    with pytest.raises(ValueError, match="duplicate symbol"):
        EnumDomain("Broken", (("A", 0), ("A", 1)))


def test_duplicate_code_rejected() -> None:
    with pytest.raises(ValueError, match="duplicate code"):
        EnumDomain("Broken", (("A", 0), ("B", 0)))


def test_unknown_domain_is_a_wiring_error() -> None:
    with pytest.raises(KeyError):
        DEFAULT_REGISTRY.domain("NoSuchDomain")


def test_unknown_values_return_none() -> None:
    assert DEFAULT_REGISTRY.code_to_symbol("PayoutStatus", 99) is None
    assert DEFAULT_REGISTRY.symbol_to_code("PayoutStatus", "ARCHIVED") is None
    assert DEFAULT_REGISTRY.symbol_to_code("PayoutStatus", 1) is None  # type: ignore[arg-type]


def test_code_lookup_rejects_bool_and_fractional_numbers() -> None:
    domain = DEFAULT_REGISTRY.domain("AwardType")
    assert domain.symbol_for(True) is None
    assert domain.symbol_for(1.5) is None
    assert domain.symbol_for(1.0) == "Gift"


def test_zero_codes_are_real_values() -> None:
    assert DEFAULT_REGISTRY.symbol_to_code("IncentivePlanType", "TargetBased") == 0
    assert DEFAULT_REGISTRY.code_to_symbol("IncentivePlanType", 0) == "TargetBased"


def test_registry_rejects_duplicate_domain_names() -> None:
    domain = EnumDomain("Solo", (("X", 1),))
    with pytest.raises(ValueError):
        EnumRegistry([domain, domain])


def test_user_role_and_instance_status_codes_are_distinct() -> None:
    role = DEFAULT_REGISTRY.domain("UserRole")
    assert role.code_for("AGENT") == 2
    assert role.code_for("READONLY") == 3
    instance = DEFAULT_REGISTRY.domain("WorkflowInstanceStatus")
    assert instance.codes == (0, 1, 2, 3, 4)
