from __future__ import annotations

import pytest

from inca.domain.enum_domains import DEFAULT_REGISTRY, EnumRegistry
from inca.domain.field_bindings import (
    AMBIGUOUS_FIELDS,
    DEFAULT_RESOLVER,
    ContextRule,
    DisambiguationResolver,
    FieldBinding,
    normalize_key,
)


def _name(domain) -> str | None:
    return domain.name if domain is not None else None


@pytest.mark.parametrize(
    "field_name, expected",
    [
        ("planType", "IncentivePlanType"),
        ("periodType", "PeriodType"),
        ("metricType", "MetricType"),
        ("targetType", "TargetType"),
        ("calculationType", "IncentiveCalculationType"),
        ("awardType", "AwardType"),
        ("currencyType", "CurrencyType"),
        ("role", "UserRole"),
    ],
)
def test_unambiguous_fields_resolve_without_context(field_name: str, expected: str) -> None:
    assert _name(DEFAULT_RESOLVER.resolve(field_name)) == expected


def test_unknown_field_is_unresolved() -> None:
    assert DEFAULT_RESOLVER.resolve("name", ("deals",)) is None


def test_status_without_context_is_unresolved() -> None:
    assert DEFAULT_RESOLVER.resolve("status") is None
    assert DEFAULT_RESOLVER.resolve("status", ("data", "items")) is None


@pytest.mark.parametrize(
    "context, expected",
    [
        (("deals",), "DealStatus"),
        (("payouts",), "PayoutStatus"),
        (("workflows",), "WorkflowStatus"),
        (("workflowInstances",), "WorkflowInstanceStatus"),
        (("stepExecutions",), "WorkflowStepExecutionStatus"),
        (("incentive-plans",), "IncentivePlanStatus"),
    ],
)
def test_status_resolves_per_context(context, expected: str) -> None:
    assert _name(DEFAULT_RESOLVER.resolve("status", context)) == expected


def test_workflow_step_wins_over_workflow() -> None:
    for context in (("workflowStep", "workflow"), ("workflow", "workflowStep")):
        assert _name(DEFAULT_RESOLVER.resolve("status", context)) == "WorkflowStepExecutionStatus"
        assert _name(DEFAULT_RESOLVER.resolve("type", context)) == "WorkflowStepType"


def test_workflow_instance_wins_over_workflow() -> None:
    resolved = DEFAULT_RESOLVER.resolve("status", ("workflowInstance", "workflows"))
    assert _name(resolved) == "WorkflowInstanceStatus"


def test_instance_history_resolves_to_step_execution() -> None:
    resolved = DEFAULT_RESOLVER.resolve("status", ("history", "instances", "workflows"))
    assert _name(resolved) == "WorkflowStepExecutionStatus"
    assert _name(DEFAULT_RESOLVER.resolve("status", ("instances", "workflows"))) == (
        "WorkflowInstanceStatus"
    )


def test_payout_wins_over_deal_and_deal_wins_over_plan() -> None:
    assert _name(DEFAULT_RESOLVER.resolve("status", ("payout", "deal"))) == "PayoutStatus"
    assert _name(DEFAULT_RESOLVER.resolve("status", ("deal", "plan"))) == "DealStatus"


def test_type_rules() -> None:
    assert _name(DEFAULT_RESOLVER.resolve("type", ("rewards",))) == "RewardType"
    assert _name(DEFAULT_RESOLVER.resolve("type", ("steps", "workflow"))) == "WorkflowStepType"
    assert DEFAULT_RESOLVER.resolve("type", ("items",)) is None


def test_markers_ignore_case_and_separators() -> None:
    assert normalize_key("Workflow_Steps") == "workflowsteps"
    assert _name(DEFAULT_RESOLVER.resolve("status", ("WORKFLOW-STEP",))) == (
        "WorkflowStepExecutionStatus"
    )


def test_priority_order_is_pinned() -> None:
    status_order = [domain for _, domain in AMBIGUOUS_FIELDS["status"]]
    assert status_order == [
        "WorkflowStepExecutionStatus",
        "WorkflowInstanceStatus",
        "WorkflowStatus",
        "PayoutStatus",
        "DealStatus",
        "IncentivePlanStatus",
    ]
    type_order = [domain for _, domain in AMBIGUOUS_FIELDS["type"]]
    assert type_order == ["WorkflowStepType", "RewardType"]


def test_rule_order_decides_overlapping_markers() -> None:
    registry: EnumRegistry = DEFAULT_REGISTRY
    general_first = DisambiguationResolver(
        [
            FieldBinding(
                "status",
                rules=(
                    ContextRule(("workflow",), registry.domain("WorkflowStatus")),
                    ContextRule(("workflowStep",), registry.domain("WorkflowStepExecutionStatus")),
                ),
            )
        ]
    )
    # A general rule listed first shadows the specific one.
    assert _name(general_first.resolve("status", ("workflowStep",))) == "WorkflowStatus"


def test_binding_requires_exactly_one_target() -> None:
    domain = DEFAULT_REGISTRY.domain("DealStatus")
    with pytest.raises(ValueError):
        FieldBinding("status")
    with pytest.raises(ValueError):
        FieldBinding("status", domain=domain, rules=(ContextRule(("deal",), domain),))


def test_duplicate_binding_rejected() -> None:
    domain = DEFAULT_REGISTRY.domain("DealStatus")
    with pytest.raises(ValueError):
        DisambiguationResolver([FieldBinding("x", domain=domain), FieldBinding("x", domain=domain)])
