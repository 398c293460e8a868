from tbank_bonus.api.bonus_rates import router as bonus_rates_router
from tbank_bonus.api.health import router as health_router

__all__ = ["bonus_rates_router", "health_router"]
