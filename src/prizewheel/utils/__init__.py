"""Utility collaborators for the prize wheel."""

from .promotion import (
    PromotionAction,
    BrowserPromotion,
    NullPromotion,
    create_promotion,
    invoke_promotion,
)

__all__ = [
    "PromotionAction",
    "BrowserPromotion",
    "NullPromotion",
    "create_promotion",
    "invoke_promotion",
]
