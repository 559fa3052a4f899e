from typing import Mapping

from congregation.domain.entities import SubscriptionTier


def monthly_price(pricing: Mapping[str, float], tier: SubscriptionTier) -> float:
    return float(pricing.get(tier.value, 0.0))
