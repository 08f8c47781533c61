from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from salon_deposits.domain.errors import ValidationError

PROBLEM_TYPE_RECORD = "https://example.com/problems/invalid-reliability-record"
PROBLEM_TYPE_APPOINTMENT = "https://example.com/problems/invalid-appointment"


class ReliabilityModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, alias_generator=to_camel, extra="forbid", frozen=True
    )


class ReasonCode(str, Enum):
    NEW_CLIENT = "NEW_CLIENT"
    RELIABLE = "RELIABLE"
    RECENT_CANCELLATION = "RECENT_CANCELLATION"
    CONSECUTIVE_CANCELLATIONS_HIGH = "CONSECUTIVE_CANCELLATIONS_HIGH"
    LOW_RELIABILITY_SCORE = "LOW_RELIABILITY_SCORE"
    MEDIUM_RELIABILITY_SCORE = "MEDIUM_RELIABILITY_SCORE"
    HIGH_CANCELLATION_RATE = "HIGH_CANCELLATION_RATE"
    WEEKEND_PREMIUM = "WEEKEND_PREMIUM"
    CUSTOM_OVERRIDE = "CUSTOM_OVERRIDE"


class RiskTier(str, Enum):
    HIGH = "highRisk"
    MEDIUM = "mediumRisk"
    LOW = "lowRisk"


class ClientReliabilityRecord(ReliabilityModel):
    """Snapshot of a client's booking history, owned by the booking system.

    ``reliability_score`` is whatever the caller cached; scoring always
    recomputes from the counters and never reads it.
    """

    client_id: str = Field(..., min_length=1)
    total_appointments: int = Field(0, ge=0, strict=True)
    total_cancellations: int = Field(0, ge=0, strict=True)
    total_no_shows: int = Field(0, ge=0, strict=True)
    consecutive_cancellations: int = Field(0, ge=0, strict=True)
    last_cancellation_date: datetime | None = None
    custom_deposit_override_percentage: int | None = Field(None, ge=0, le=100, strict=True)
    reliability_score: float | None = Field(None, ge=0, le=100)

    @model_validator(mode="after")
    def validate_counters(self) -> ClientReliabilityRecord:
        if self.total_cancellations > self.total_appointments:
            raise ValueError("totalCancellations cannot exceed totalAppointments")
        if self.total_no_shows > self.total_appointments:
            raise ValueError("totalNoShows cannot exceed totalAppointments")
        return self


class AppointmentContext(ReliabilityModel):
    appointment_id: int | str
    client_id: str = Field(..., min_length=1)
    service_price: Decimal = Field(..., ge=0)
    scheduled_date: date
    start_time: time
    is_weekend_premium: bool = False
    status: str
    client_name: str | None = None
    service_name: str | None = None


class DepositDecision(ReliabilityModel):
    percentage: int = Field(..., ge=0, le=100)
    reason_code: ReasonCode


class RiskCategories(ReliabilityModel):
    high_risk: list[ClientReliabilityRecord] = Field(default_factory=list)
    medium_risk: list[ClientReliabilityRecord] = Field(default_factory=list)
    low_risk: list[ClientReliabilityRecord] = Field(default_factory=list)

    def bucket(self, tier: RiskTier) -> list[ClientReliabilityRecord]:
        if tier is RiskTier.HIGH:
            return self.high_risk
        if tier is RiskTier.MEDIUM:
            return self.medium_risk
        return self.low_risk

    def counts(self) -> dict[RiskTier, int]:
        return {tier: len(self.bucket(tier)) for tier in RiskTier}


class AttentionItem(ReliabilityModel):
    appointment: AppointmentContext
    decision: DepositDecision
    deposit_amount: Decimal
    reliability_score: int = Field(..., ge=0, le=100)


class ReliabilitySummary(ReliabilityModel):
    high_risk_count: int = 0
    medium_risk_count: int = 0
    low_risk_count: int = 0
    needs_attention_count: int = 0
    total_cancellations: int = 0
    average_reliability_score: int = Field(100, ge=0, le=100)


ModelT = TypeVar("ModelT", bound=ReliabilityModel)


def _error_entries(exc: PydanticValidationError) -> list[dict[str, str]]:
    errors = []
    for error in exc.errors():
        loc = error.get("loc", ())
        field = ".".join(str(part) for part in loc) or "__root__"
        errors.append({"field": field, "message": error.get("msg", "Invalid value")})
    return errors


def _load(model: type[ModelT], payload: Mapping[str, Any], *, detail: str, type_: str) -> ModelT:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(detail=detail, type=type_, errors=_error_entries(exc)) from exc


def load_record(payload: Mapping[str, Any]) -> ClientReliabilityRecord:
    return _load(
        ClientReliabilityRecord,
        payload,
        detail="Client reliability record failed validation",
        type_=PROBLEM_TYPE_RECORD,
    )


def load_appointment(payload: Mapping[str, Any]) -> AppointmentContext:
    return _load(
        AppointmentContext,
        payload,
        detail="Appointment context failed validation",
        type_=PROBLEM_TYPE_APPOINTMENT,
    )
