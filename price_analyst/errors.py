"""Exceptions raised by the analysis engine."""


class PriceAnalystError(Exception):
    """Base class for analysis errors."""


class NoDataAvailable(PriceAnalystError):
    """Raised when a symbol has no price bars to analyse."""

    def __init__(self, symbol: str = ""):
        self.symbol = symbol
        label = f" for {symbol}" if symbol else ""
        super().__init__(f"No data available for analysis{label}")
