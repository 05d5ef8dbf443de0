"""
Promotional side action fired on every spin and claim.

The action is opaque to the wheel: it is invoked fire-and-forget and any
failure is logged and swallowed so the spin continues regardless.
"""

from abc import ABC, abstractmethod
import logging
import webbrowser

from prizewheel.settings import PromotionSettings

logger = logging.getLogger(__name__)


class PromotionAction(ABC):
    """Abstract side-effecting promotional action."""

    @abstractmethod
    def invoke(self) -> None:
        """Perform the action. May raise; callers use invoke_promotion."""
        ...


class BrowserPromotion(PromotionAction):
    """Opens the promotional URL in a new browser tab."""

    def __init__(self, url: str) -> None:
        self.url = url

    def invoke(self) -> None:
        if not webbrowser.open(self.url, new=2):
            raise RuntimeError(f"No browser could open {self.url}")
        logger.debug(f"Promotion opened: {self.url}")

    def __repr__(self) -> str:
        return f"BrowserPromotion({self.url!r})"


class NullPromotion(PromotionAction):
    """Does nothing. Used when promotions are disabled."""

    def invoke(self) -> None:
        pass


def invoke_promotion(action: PromotionAction) -> bool:
    """Invoke ``action``, swallowing and logging any failure.

    Returns:
        True if the action completed without raising
    """
    try:
        action.invoke()
    except Exception as e:
        logger.warning(f"Promotion action failed: {e}")
        return False
    return True


def create_promotion(settings: PromotionSettings) -> PromotionAction:
    """Build the promotion action described by ``settings``."""
    if not settings.enabled:
        logger.info("Promotions disabled")
        return NullPromotion()
    return BrowserPromotion(settings.url)
