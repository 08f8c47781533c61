import math
from fractions import Fraction

from salon_deposits.domain.reliability.schemas import ClientReliabilityRecord

MAX_SCORE = 100
MIN_SCORE = 0
CANCELLATION_RATE_WEIGHT = Fraction(8, 10)
NO_SHOW_RATE_WEIGHT = Fraction(12, 10)
CONSECUTIVE_CANCELLATION_PENALTY = 15


def _rate(count: int, total: int) -> Fraction:
    if total == 0:
        return Fraction(0)
    return Fraction(count * 100, total)


def cancellation_rate(record: ClientReliabilityRecord) -> Fraction:
    """Cancellations as a percentage of all appointments, 0 for a client with no history."""
    return _rate(record.total_cancellations, record.total_appointments)


def no_show_rate(record: ClientReliabilityRecord) -> Fraction:
    return _rate(record.total_no_shows, record.total_appointments)


def exact_score(record: ClientReliabilityRecord) -> Fraction:
    """Clamped trust score before flooring, 100 for a client with no history."""
    if record.total_appointments == 0:
        return Fraction(MAX_SCORE)

    score = (
        MAX_SCORE
        - cancellation_rate(record) * CANCELLATION_RATE_WEIGHT
        - no_show_rate(record) * NO_SHOW_RATE_WEIGHT
        - record.consecutive_cancellations * CONSECUTIVE_CANCELLATION_PENALTY
    )
    return min(max(score, Fraction(MIN_SCORE)), Fraction(MAX_SCORE))


def compute_score(record: ClientReliabilityRecord) -> int:
    """Trust score in [0, 100] recomputed from the record's counters.

    New clients start at 100. Rates are exact rationals, so 3 cancellations
    in 10 appointments is exactly 30%. The clamped score is floored; for any
    integer threshold ``floor(score) < threshold`` iff ``score < threshold``.
    """
    return math.floor(exact_score(record))
