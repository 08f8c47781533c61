from salon_deposits.domain.reliability.policy import (
    DEPOSIT_RULES,
    deposit_amount,
    evaluate,
    evaluate_for_client,
)
from salon_deposits.domain.reliability.reporting import (
    build_attention_list,
    categorize,
    index_records,
    risk_tier_for_score,
    select_needs_attention,
    summarize,
)
from salon_deposits.domain.reliability.schemas import (
    AppointmentContext,
    AttentionItem,
    ClientReliabilityRecord,
    DepositDecision,
    ReasonCode,
    ReliabilitySummary,
    RiskCategories,
    RiskTier,
    load_appointment,
    load_record,
)
from salon_deposits.domain.reliability.scoring import (
    cancellation_rate,
    compute_score,
    exact_score,
    no_show_rate,
)
from salon_deposits.domain.reliability.weekend import is_weekend_premium_date

__all__ = [
    "DEPOSIT_RULES",
    "AppointmentContext",
    "AttentionItem",
    "ClientReliabilityRecord",
    "DepositDecision",
    "ReasonCode",
    "ReliabilitySummary",
    "RiskCategories",
    "RiskTier",
    "build_attention_list",
    "cancellation_rate",
    "categorize",
    "compute_score",
    "deposit_amount",
    "evaluate",
    "evaluate_for_client",
    "exact_score",
    "index_records",
    "is_weekend_premium_date",
    "load_appointment",
    "load_record",
    "no_show_rate",
    "risk_tier_for_score",
    "select_needs_attention",
    "summarize",
]
