"""
Palette Core Configuration
Manages environment variables and defaults for conversion and extraction services.
"""
import numbers
import os
from typing import Literal

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuration class for palette-core services."""

    # Logging and metrics
    LOG_LEVEL: str = os.environ.get("PALETTE_LOG_LEVEL", "INFO")
    METRICS_ENABLED: bool = bool(int(os.environ.get("PALETTE_METRICS_ENABLED", "1")))
    METRICS_WINDOW: int = int(os.environ.get("PALETTE_METRICS_WINDOW", "1000"))

    # Extraction defaults
    DEFAULT_COUNT: int = int(os.environ.get("PALETTE_DEFAULT_COUNT", "5"))
    RNG_SEED: int = int(os.environ.get("PALETTE_RNG_SEED", "42"))
    SAMPLE_SIZE: int = int(os.environ.get("PALETTE_SAMPLE_SIZE", "50"))
    ORDER: Literal["brightness", "weight"] = os.environ.get("PALETTE_ORDER", "brightness")

    # Clustering
    MAX_ITERATIONS: int = int(os.environ.get("PALETTE_MAX_ITERATIONS", "100"))
    CONVERGENCE_TOLERANCE: float = float(os.environ.get("PALETTE_CONVERGENCE_TOLERANCE", "1.0"))

    # Sample filtering (HSB, fractions of 1.0)
    MIN_SATURATION: float = float(os.environ.get("PALETTE_MIN_SATURATION", "0.15"))
    MIN_BRIGHTNESS: float = float(os.environ.get("PALETTE_MIN_BRIGHTNESS", "0.15"))
    EXCLUDE_EXTREMES: bool = bool(int(os.environ.get("PALETTE_EXCLUDE_EXTREMES", "1")))

    # Supported palette orderings
    SUPPORTED_ORDERS = ("brightness", "weight")

    @classmethod
    def validate_count(cls, count: int) -> bool:
        """Validate requested palette size."""
        return (isinstance(count, numbers.Integral) and not isinstance(count, bool)
                and count >= 1)

    @classmethod
    def validate_order(cls, order: str) -> bool:
        """Validate palette ordering parameter."""
        return order in cls.SUPPORTED_ORDERS

    @classmethod
    def validate_threshold(cls, value: float) -> bool:
        """Validate an HSB filter threshold."""
        return 0.0 <= value <= 1.0


# Global config instance
config = Config()
