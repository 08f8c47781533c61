import json
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

WEEKDAY_NAMES = {
    "mon": 0,
    "monday": 0,
    "tue": 1,
    "tuesday": 1,
    "wed": 2,
    "wednesday": 2,
    "thu": 3,
    "thursday": 3,
    "fri": 4,
    "friday": 4,
    "sat": 5,
    "saturday": 5,
    "sun": 6,
    "sunday": 6,
}


class Settings(BaseSettings):
    app_name: str = "salon-deposits"
    app_env: Literal["dev", "prod"] = Field("prod")
    log_level: str = Field("INFO")
    reliability_weekend_premium_weekdays_raw: str | None = Field(
        None, validation_alias="reliability_weekend_premium_weekdays"
    )
    reliability_decision_logging: bool = Field(True)

    model_config = SettingsConfigDict(env_file=".env", enable_decoding=False, extra="ignore")

    @field_validator("reliability_weekend_premium_weekdays_raw", mode="before")
    @classmethod
    def normalize_list_raw(cls, value: object) -> str | None:
        return cls._normalize_raw_list(value)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log_level: {value}")
        return normalized

    @model_validator(mode="after")
    def validate_weekend_premium_weekdays(self) -> "Settings":
        # Fail at load time rather than on first evaluation.
        self.reliability_weekend_premium_weekdays
        return self

    @property
    def reliability_weekend_premium_weekdays(self) -> list[int]:
        parsed = self._parse_list(self.reliability_weekend_premium_weekdays_raw)
        if not parsed:
            return [WEEKDAY_NAMES["saturday"]]
        return [self._parse_weekday(entry) for entry in parsed]

    @reliability_weekend_premium_weekdays.setter
    def reliability_weekend_premium_weekdays(self, value: list[int | str] | str | None) -> None:
        self.reliability_weekend_premium_weekdays_raw = self._normalize_raw_list(value)

    @staticmethod
    def _parse_weekday(entry: str) -> int:
        lowered = entry.strip().lower()
        if lowered in WEEKDAY_NAMES:
            return WEEKDAY_NAMES[lowered]
        if lowered.isdigit() and 0 <= int(lowered) <= 6:
            return int(lowered)
        raise ValueError(f"Invalid weekday in RELIABILITY_WEEKEND_PREMIUM_WEEKDAYS: {entry}")

    @staticmethod
    def _normalize_raw_list(value: object) -> str | None:
        if value is None:
            return None
        if isinstance(value, str):
            return value
        if isinstance(value, list):
            return json.dumps(value)
        return str(value)

    @staticmethod
    def _parse_list(raw: str | None) -> list[str]:
        if raw is None:
            return []
        stripped = raw.strip()
        if not stripped:
            return []
        if stripped.startswith("["):
            parsed = json.loads(stripped)
            if isinstance(parsed, list):
                return [str(entry).strip() for entry in parsed if str(entry).strip()]
            return [str(parsed).strip()] if str(parsed).strip() else []
        entries = [entry.strip() for entry in stripped.split(",")]
        return [entry for entry in entries if entry]


settings = Settings()
