import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable

from salon_deposits.domain.errors import RecordLookupError
from salon_deposits.domain.reliability.schemas import (
    AppointmentContext,
    ClientReliabilityRecord,
    DepositDecision,
    ReasonCode,
)
from salon_deposits.domain.reliability.scoring import cancellation_rate, compute_score
from salon_deposits.settings import settings

logger = logging.getLogger(__name__)

BASE_DEPOSIT_PERCENT = 20
HIGH_CONSECUTIVE_CANCELLATIONS = 2
HIGH_CONSECUTIVE_DEPOSIT_PERCENT = 70
RECENT_CANCELLATION_DEPOSIT_PERCENT = 50
LOW_SCORE_THRESHOLD = 30
LOW_SCORE_DEPOSIT_PERCENT = 70
MEDIUM_SCORE_THRESHOLD = 60
MEDIUM_SCORE_DEPOSIT_PERCENT = 50
HIGH_CANCELLATION_RATE_THRESHOLD = 30
HIGH_CANCELLATION_RATE_DEPOSIT_PERCENT = 60
WEEKEND_PREMIUM_DEPOSIT_PERCENT = 30
DEFAULT_REASONS = frozenset({ReasonCode.RELIABLE, ReasonCode.NEW_CLIENT})
CENTS = Decimal("0.01")

RecordLookup = Callable[[str], ClientReliabilityRecord | None]


@dataclass(frozen=True)
class PolicyContext:
    appointment: AppointmentContext
    record: ClientReliabilityRecord | None
    score: int | None


@dataclass(frozen=True)
class PolicyState:
    percentage: int
    reason: ReasonCode


@dataclass(frozen=True)
class RuleOutcome:
    floor: int
    reason: ReasonCode | None


DepositRule = Callable[[PolicyContext, PolicyState], RuleOutcome | None]


def _consecutive_cancellation_rule(context: PolicyContext, state: PolicyState) -> RuleOutcome | None:
    if context.record is None:
        return None
    consecutive = context.record.consecutive_cancellations
    if consecutive >= HIGH_CONSECUTIVE_CANCELLATIONS:
        return RuleOutcome(HIGH_CONSECUTIVE_DEPOSIT_PERCENT, ReasonCode.CONSECUTIVE_CANCELLATIONS_HIGH)
    if consecutive == 1:
        return RuleOutcome(RECENT_CANCELLATION_DEPOSIT_PERCENT, ReasonCode.RECENT_CANCELLATION)
    return None


def _reliability_score_rule(context: PolicyContext, state: PolicyState) -> RuleOutcome | None:
    if context.score is None:
        return None
    if context.score < LOW_SCORE_THRESHOLD:
        return RuleOutcome(LOW_SCORE_DEPOSIT_PERCENT, ReasonCode.LOW_RELIABILITY_SCORE)
    if context.score < MEDIUM_SCORE_THRESHOLD:
        return RuleOutcome(MEDIUM_SCORE_DEPOSIT_PERCENT, ReasonCode.MEDIUM_RELIABILITY_SCORE)
    return None


def _cancellation_rate_rule(context: PolicyContext, state: PolicyState) -> RuleOutcome | None:
    if context.record is None:
        return None
    if cancellation_rate(context.record) > HIGH_CANCELLATION_RATE_THRESHOLD:
        return RuleOutcome(HIGH_CANCELLATION_RATE_DEPOSIT_PERCENT, ReasonCode.HIGH_CANCELLATION_RATE)
    return None


def _weekend_premium_rule(context: PolicyContext, state: PolicyState) -> RuleOutcome | None:
    if not context.appointment.is_weekend_premium:
        return None
    # Only relabels when the weekend floor is what set the percentage.
    percentage = max(state.percentage, WEEKEND_PREMIUM_DEPOSIT_PERCENT)
    if percentage == WEEKEND_PREMIUM_DEPOSIT_PERCENT and state.reason in DEFAULT_REASONS:
        return RuleOutcome(WEEKEND_PREMIUM_DEPOSIT_PERCENT, ReasonCode.WEEKEND_PREMIUM)
    return RuleOutcome(WEEKEND_PREMIUM_DEPOSIT_PERCENT, None)


# Order matters: every firing rule overwrites the reason, so the last match wins
# the label even when an earlier rule set a higher percentage.
DEPOSIT_RULES: tuple[DepositRule, ...] = (
    _consecutive_cancellation_rule,
    _reliability_score_rule,
    _cancellation_rate_rule,
    _weekend_premium_rule,
)


def _apply(state: PolicyState, outcome: RuleOutcome) -> PolicyState:
    return PolicyState(
        percentage=max(state.percentage, outcome.floor),
        reason=outcome.reason if outcome.reason is not None else state.reason,
    )


def _log_decision(
    appointment: AppointmentContext,
    record: ClientReliabilityRecord | None,
    decision: DepositDecision,
) -> None:
    if not settings.reliability_decision_logging:
        return
    logger.debug(
        "deposit_evaluated",
        extra={
            "extra": {
                "event": "deposit_evaluated",
                "appointment_id": appointment.appointment_id,
                "client_id": appointment.client_id,
                "has_record": record is not None,
                "percentage": decision.percentage,
                "reason_code": decision.reason_code.value,
            }
        },
    )


def evaluate(
    appointment: AppointmentContext, record: ClientReliabilityRecord | None
) -> DepositDecision:
    """Required deposit percentage for ``appointment`` and the code explaining it.

    A custom override on the record bypasses every rule. Without a record the
    client is treated as new; otherwise the rules in ``DEPOSIT_RULES`` raise
    the 20% base in order.
    """
    if record is not None and record.custom_deposit_override_percentage is not None:
        decision = DepositDecision(
            percentage=record.custom_deposit_override_percentage,
            reason_code=ReasonCode.CUSTOM_OVERRIDE,
        )
        _log_decision(appointment, record, decision)
        return decision

    if record is None:
        state = PolicyState(percentage=BASE_DEPOSIT_PERCENT, reason=ReasonCode.NEW_CLIENT)
        context = PolicyContext(appointment=appointment, record=None, score=None)
    else:
        state = PolicyState(percentage=BASE_DEPOSIT_PERCENT, reason=ReasonCode.RELIABLE)
        context = PolicyContext(appointment=appointment, record=record, score=compute_score(record))

    for rule in DEPOSIT_RULES:
        outcome = rule(context, state)
        if outcome is not None:
            state = _apply(state, outcome)

    decision = DepositDecision(percentage=state.percentage, reason_code=state.reason)
    _log_decision(appointment, record, decision)
    return decision


def evaluate_for_client(appointment: AppointmentContext, lookup: RecordLookup) -> DepositDecision:
    """Evaluate with a record fetched through ``lookup``.

    A failed lookup must not block the booking: the client is scored as new.
    """
    try:
        record = lookup(appointment.client_id)
    except RecordLookupError as exc:
        logger.warning(
            "reliability_lookup_failed",
            extra={
                "extra": {
                    "event": "reliability_lookup_failed",
                    "appointment_id": appointment.appointment_id,
                    "client_id": appointment.client_id,
                    "detail": exc.detail,
                }
            },
        )
        record = None
    return evaluate(appointment, record)


def deposit_amount(service_price: Decimal | int | str, percentage: int) -> Decimal:
    """Deposit owed for ``service_price`` at ``percentage``, rounded half-up to cents."""
    price = service_price if isinstance(service_price, Decimal) else Decimal(str(service_price))
    return (price * percentage / 100).quantize(CENTS, rounding=ROUND_HALF_UP)
