"""Token balance and the time-credit shop (kept in memory only)."""

import logging
from dataclasses import dataclass, field
from typing import Dict

from settings import SHOP_ITEMS, SHOP_PLATFORMS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShopItem:
    platform: str
    title: str
    token_cost: int
    minutes: int


CATALOG = tuple(ShopItem(*item) for item in SHOP_ITEMS)


def _empty_credits() -> Dict[str, int]:
    return {platform: 0 for platform in SHOP_PLATFORMS}


@dataclass
class Wallet:
    tokens: int = 0
    time_credits: Dict[str, int] = field(default_factory=_empty_credits)

    def add_tokens(self, amount):
        if amount <= 0:
            return
        self.tokens += amount

    def spend_tokens_for_credit(self, platform, token_cost, minutes) -> bool:
        """Trade tokens for minutes on ``platform``; False (and no change) if not possible."""
        if token_cost <= 0 or minutes <= 0:
            return False
        if platform not in self.time_credits:
            logger.warning("Unknown platform %r", platform)
            return False
        if self.tokens < token_cost:
            return False
        self.tokens -= token_cost
        self.time_credits[platform] += minutes
        logger.info("Bought %d min of %s for %d tokens", minutes, platform, token_cost)
        return True

    def buy(self, item: ShopItem) -> bool:
        return self.spend_tokens_for_credit(item.platform, item.token_cost, item.minutes)

    def reset(self):
        self.tokens = 0
        self.time_credits = _empty_credits()
