"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

import math
from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert a "#rrggbb" color string to an RGB tuple."""
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        raise ValueError(f"Invalid hex color: #{hex_color}")
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


class WheelSettings(BaseSettings):
    """Wheel layout and spin settings."""

    model_config = SettingsConfigDict(env_prefix="PRIZEWHEEL_WHEEL_", extra="ignore")

    # Order around the wheel, clockwise from rotation zero
    labels: list[str] = Field(
        default=["Try Again", "$5", "$10", "$20", "$50", "$100"]
    )
    colors: list[str] = Field(
        default=["#f87171", "#fbbf24", "#60a5fa", "#34d399", "#a78bfa", "#f472b6"]
    )

    # Scripted outcomes
    no_win_label: str = "Try Again"
    reward_label: str = "$100"

    # Spin animation
    # Two turns keep every spin clockwise, including from rotation zero
    extra_full_turns: int = Field(default=7, ge=2)
    spin_duration_ms: float = Field(default=4200.0, gt=0)
    easing: str = "ease_out_cubic"

    # 12 o'clock in screen coordinates (y grows downward)
    pointer_angle: float = -math.pi / 2

    @model_validator(mode="after")
    def _check_sectors(self) -> "WheelSettings":
        if not self.labels:
            raise ValueError("Wheel needs at least one sector")
        if len(self.labels) != len(self.colors):
            raise ValueError(
                f"Got {len(self.labels)} labels but {len(self.colors)} colors"
            )
        for label in (self.no_win_label, self.reward_label):
            if label not in self.labels:
                raise ValueError(f"Outcome label not on the wheel: {label!r}")
        for color in self.colors:
            hex_to_rgb(color)
        return self


class DisplaySettings(BaseSettings):
    """Display-related settings."""

    model_config = SettingsConfigDict(env_prefix="PRIZEWHEEL_DISPLAY_", extra="ignore")

    # Logical wheel surface size (square)
    size: int = Field(default=240, ge=32)

    # Physical pixels per logical pixel (high-dpi surfaces)
    pixel_ratio: int = Field(default=1, ge=1, le=4)

    # Rendering
    fps: int = 60

    # Palette
    background: str = "#0b1020"
    outline: str = "#111111"
    label_color: str = "#ffffff"
    hub_color: str = "#060606"
    hub_outline: str = "#222222"
    pointer_color: str = "#ff3b3b"


class PromotionSettings(BaseSettings):
    """Promotional link opened on spin and on claim."""

    model_config = SettingsConfigDict(env_prefix="PRIZEWHEEL_PROMO_", extra="ignore")

    enabled: bool = True
    url: str = "https://example.com/promo"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PRIZEWHEEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Paths
    log_file: Path = Path("prizewheel.log")

    # Simulator settings
    simulator_window_width: int = 960
    simulator_window_height: int = 720
    simulator_scale: int = Field(default=2, ge=1)
    simulator_fullscreen: bool = False

    # Nested settings
    wheel: WheelSettings = Field(default_factory=WheelSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    promotion: PromotionSettings = Field(default_factory=PromotionSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
