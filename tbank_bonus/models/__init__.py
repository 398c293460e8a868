# tbank_bonus/models/__init__.py
from tbank_bonus.models.bonus_rate import BonusRate

__all__ = ["BonusRate"]
