from tbank_bonus.schemas.bonus_rate import (
    BonusRatesUpdate,
    ErrorOut,
    HealthOut,
    MessageOut,
)

__all__ = ["BonusRatesUpdate", "ErrorOut", "HealthOut", "MessageOut"]
