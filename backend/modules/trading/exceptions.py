"""
Trading module exceptions.

The policy functions themselves never raise; these are for the service
layer, which refuses to persist invalid settings.
"""

from shared.exceptions import ValidationError


class TradingSettingsValidationError(ValidationError):
    """Raised when a settings update breaks one or more limits."""

    def __init__(self, violations: list[str]):
        super().__init__(
            "Configurações de trading inválidas",
            code="INVALID_TRADING_SETTINGS",
            details={"violations": violations},
        )
        self.violations = violations
