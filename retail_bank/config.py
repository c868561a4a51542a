"""
Configuration Management Module

Provides centralized bank policy and runtime configuration using
pydantic-settings for environment-based overrides.
"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class BankConfig(BaseSettings):
    """Retail bank policy and runtime configuration"""

    model_config = SettingsConfigDict(
        env_prefix="BANK_",
        env_file=".env",
        case_sensitive=False,
    )

    # Eligibility rules
    min_age: int = 16
    college_checking_max_age: int = 24  # Holders must be strictly younger

    # Annual interest rates
    checking_rate: Decimal = Decimal("0.01")
    college_checking_rate: Decimal = Decimal("0.025")
    savings_rate: Decimal = Decimal("0.04")
    savings_loyal_rate: Decimal = Decimal("0.0425")
    money_market_rate: Decimal = Decimal("0.045")
    money_market_loyal_rate: Decimal = Decimal("0.0475")

    # Monthly fees and the balance at which they are waived
    checking_fee: Decimal = Decimal("12.00")
    checking_fee_waiver_balance: Decimal = Decimal("1000.00")
    savings_fee: Decimal = Decimal("25.00")
    savings_fee_waiver_balance: Decimal = Decimal("500.00")
    money_market_fee: Decimal = Decimal("25.00")
    money_market_fee_waiver_balance: Decimal = Decimal("2000.00")

    # Money market rules
    money_market_minimum_opening: Decimal = Decimal("2000.00")
    money_market_loyal_withdrawal_cap: int = 3

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text


# Global configuration instance
config = BankConfig()


def get_config() -> BankConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BankConfig:
    """Reload configuration from environment"""
    global config
    config = BankConfig()
    return config
