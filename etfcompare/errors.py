from __future__ import annotations


class ComparisonError(Exception):
    """Base class for every fatal condition of a comparison run."""


class DateParseError(ComparisonError, ValueError):
    def __init__(self, value: str, symbol: str | None = None):
        self.value = value
        self.symbol = symbol
        where = f" for {symbol}" if symbol else ""
        super().__init__(f"parse date {value!r}{where}: expected YYYY-MM-DD or YYYY-MM-DD HH:MM:SS")


class DataRetrievalError(ComparisonError):
    def __init__(self, symbol: str, message: str):
        self.symbol = symbol
        super().__init__(f"history error {symbol}: {message}")


class NoOverlapError(ComparisonError):
    def __init__(self, message: str = "No aligned months. Check symbols or date range."):
        super().__init__(message)


class NoValidPeriodsError(ComparisonError):
    def __init__(self, message: str = "No valid months for ETF vs index comparison."):
        super().__init__(message)


class ConfigError(ComparisonError, ValueError):
    pass


class InvalidWeightError(ConfigError):
    def __init__(self, name: str, value: float):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be between 0 and 1")
