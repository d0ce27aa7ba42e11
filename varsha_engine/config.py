"""
config.py
=========
Engine settings.

Defaults suit the classical Varshaphala conventions; every field can be
overridden per call or through ``VARSHA_*`` environment variables
(``VARSHA_AYANAMSA``, ``VARSHA_HOUSE_SYSTEM``, ``VARSHA_SEARCH_DAYS``,
``VARSHA_WIDEN_DAYS``, ``VARSHA_BISECTION_ITERATIONS``,
``VARSHA_APPLYING_STEP_DAYS``). Empty variables are ignored.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

AYANAMSA_PATTERN = "^(lahiri|raman|kp|fagan)$"
HOUSE_SYSTEM_PATTERN = "^(whole_sign|placidus|equal)$"


class EngineConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VARSHA_",
        env_ignore_empty=True,
        case_sensitive=False,
        populate_by_name=True,
        frozen=True,
    )

    ayanamsa:                 str   = Field("lahiri", pattern=AYANAMSA_PATTERN)
    house_system:             str   = Field("whole_sign", pattern=HOUSE_SYSTEM_PATTERN)
    # Solar return search: ±days around the birthday, then one wider retry
    search_half_window_days:  float = Field(2.0, gt=0, le=10,
                                            validation_alias="VARSHA_SEARCH_DAYS")
    widened_half_window_days: float = Field(6.0, gt=0, le=30,
                                            validation_alias="VARSHA_WIDEN_DAYS")
    bisection_iterations:     int   = Field(30, ge=10, le=80)
    # Forward projection used by the applying/separating test
    applying_step_days:       float = Field(0.01, gt=0, le=1)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Fresh config read from the current ``VARSHA_*`` environment."""
        return cls()


DEFAULT_CONFIG = EngineConfig()
