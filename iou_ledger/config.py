"""Configuration management for iou-ledger."""

from dataclasses import dataclass, field
from pathlib import Path

from iou_ledger.exceptions import ConfigurationError
from iou_ledger.formatting import DEFAULT_CURRENCY_CODE, Currency, get_currency_by_code

LOG_FORMATS = ("standard", "json")


@dataclass
class StorageConfig:
    """JSON file storage configuration."""

    data_dir: Path = field(default_factory=lambda: Path("data"))
    pretty_json: bool = False


@dataclass
class DisplayConfig:
    """Display configuration."""

    currency_code: str = DEFAULT_CURRENCY_CODE

    @property
    def currency(self) -> Currency:
        """Resolve the configured currency."""
        currency = get_currency_by_code(self.currency_code)
        if currency is None:
            raise ConfigurationError(f"Unknown currency code: {self.currency_code}")
        return currency


@dataclass
class LedgerConfig:
    """Main configuration for iou-ledger."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> None:
        """Check cross-field constraints.

        Raises
        ------
        ConfigurationError
            If the currency or log format is unknown.
        """
        _ = self.display.currency
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Unknown log format {self.log_format!r} (expected one of: {', '.join(LOG_FORMATS)})"
            )

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        storage = StorageConfig(
            data_dir=Path(os.getenv("LEDGER_DATA_DIR", "data")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        display = DisplayConfig(
            currency_code=os.getenv("CURRENCY", DEFAULT_CURRENCY_CODE).upper(),
        )

        seed_str = os.getenv("SEED")
        try:
            seed = int(seed_str) if seed_str else None
        except ValueError as e:
            raise ConfigurationError(f"SEED must be an integer, got {seed_str!r}") from e

        config = cls(
            storage=storage,
            display=display,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
        config.validate()
        return config
