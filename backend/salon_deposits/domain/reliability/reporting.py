import logging
import math
from fractions import Fraction
from typing import Iterable, Mapping, Sequence

from salon_deposits.domain.reliability.policy import deposit_amount, evaluate
from salon_deposits.domain.reliability.schemas import (
    AppointmentContext,
    AttentionItem,
    ClientReliabilityRecord,
    ReliabilitySummary,
    RiskCategories,
    RiskTier,
)
from salon_deposits.domain.reliability.scoring import MAX_SCORE, compute_score, exact_score

logger = logging.getLogger(__name__)

HIGH_RISK_SCORE_BELOW = 30
LOW_RISK_SCORE_FROM = 70
ATTENTION_THRESHOLD_PERCENT = 30


def risk_tier_for_score(score: int) -> RiskTier:
    if score < HIGH_RISK_SCORE_BELOW:
        return RiskTier.HIGH
    if score < LOW_RISK_SCORE_FROM:
        return RiskTier.MEDIUM
    return RiskTier.LOW


def categorize(records: Iterable[ClientReliabilityRecord]) -> RiskCategories:
    """Partition records into risk tiers by recomputed score, keeping input order per tier."""
    buckets: dict[RiskTier, list[ClientReliabilityRecord]] = {tier: [] for tier in RiskTier}
    for record in records:
        buckets[risk_tier_for_score(compute_score(record))].append(record)
    return RiskCategories(
        high_risk=buckets[RiskTier.HIGH],
        medium_risk=buckets[RiskTier.MEDIUM],
        low_risk=buckets[RiskTier.LOW],
    )


def index_records(
    records: Iterable[ClientReliabilityRecord],
) -> dict[str, ClientReliabilityRecord]:
    # First record wins for a repeated client id.
    indexed: dict[str, ClientReliabilityRecord] = {}
    for record in records:
        indexed.setdefault(record.client_id, record)
    return indexed


def select_needs_attention(
    appointments: Iterable[AppointmentContext],
    records_by_client_id: Mapping[str, ClientReliabilityRecord],
    *,
    threshold: int = ATTENTION_THRESHOLD_PERCENT,
) -> list[AppointmentContext]:
    """Appointments whose computed deposit is above ``threshold`` percent (30 by default)."""
    return [
        appointment
        for appointment in appointments
        if evaluate(appointment, records_by_client_id.get(appointment.client_id)).percentage > threshold
    ]


def build_attention_list(
    appointments: Iterable[AppointmentContext],
    records_by_client_id: Mapping[str, ClientReliabilityRecord],
    *,
    threshold: int = ATTENTION_THRESHOLD_PERCENT,
) -> list[AttentionItem]:
    items: list[AttentionItem] = []
    for appointment in appointments:
        record = records_by_client_id.get(appointment.client_id)
        decision = evaluate(appointment, record)
        if decision.percentage <= threshold:
            continue
        items.append(
            AttentionItem(
                appointment=appointment,
                decision=decision,
                deposit_amount=deposit_amount(appointment.service_price, decision.percentage),
                reliability_score=compute_score(record) if record is not None else MAX_SCORE,
            )
        )
    return items


def summarize(
    records: Sequence[ClientReliabilityRecord],
    appointments: Iterable[AppointmentContext],
    *,
    threshold: int = ATTENTION_THRESHOLD_PERCENT,
) -> ReliabilitySummary:
    """Dashboard counters; the average is the exact mean score rounded half-up."""
    categories = categorize(records)
    counts = categories.counts()
    attention = select_needs_attention(appointments, index_records(records), threshold=threshold)

    if records:
        mean = sum((exact_score(record) for record in records), Fraction(0)) / len(records)
        # Half-up on the exact mean; scores are never negative.
        average = math.floor(mean + Fraction(1, 2))
    else:
        average = MAX_SCORE

    summary = ReliabilitySummary(
        high_risk_count=counts[RiskTier.HIGH],
        medium_risk_count=counts[RiskTier.MEDIUM],
        low_risk_count=counts[RiskTier.LOW],
        needs_attention_count=len(attention),
        total_cancellations=sum(record.total_cancellations for record in records),
        average_reliability_score=average,
    )
    logger.info(
        "reliability_summary",
        extra={"extra": {"event": "reliability_summary", **summary.model_dump()}},
    )
    return summary
