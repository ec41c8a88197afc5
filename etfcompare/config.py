"""
Run configuration.

Defaults mirror the classic comparison: SPY against the MSCI World index
from 2019, an 80/20 LifeStrategy blend and a 90 -> 60 glide path. Values
can be overridden from ``ETFCOMPARE_*`` environment variables (a ``.env``
file in the working directory is loaded first).
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .compound import BASE
from .errors import ConfigError, InvalidWeightError
from .pipeline import BlendWeights

ENV_PREFIX = "ETFCOMPARE_"

DEFAULT_ETF = "SPY"
DEFAULT_INDEX = "^990100-USD-STRD"
DEFAULT_START = "2019-01-01"
DEFAULT_INTERVAL = "1d"
DEFAULT_LIFE_ETF = 0.80
DEFAULT_GLIDE_START = 0.90
DEFAULT_GLIDE_END = 0.60


def validate_weight(name: str, value: float) -> float:
    if not (0.0 <= value <= 1.0):
        raise InvalidWeightError(name, value)
    return value


def validate_start(value: str) -> str:
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid start date {value!r}: {e}") from e
    return value


@dataclass
class CompareConfig:
    etf_symbol: str = DEFAULT_ETF
    index_symbol: str = DEFAULT_INDEX
    start: str = DEFAULT_START
    interval: str = DEFAULT_INTERVAL
    life_etf: float = DEFAULT_LIFE_ETF
    glide_start: float = DEFAULT_GLIDE_START
    glide_end: float = DEFAULT_GLIDE_END
    base: float = BASE

    def validate(self) -> "CompareConfig":
        validate_start(self.start)
        validate_weight("life-etf", self.life_etf)
        validate_weight("glide-start", self.glide_start)
        validate_weight("glide-end", self.glide_end)
        return self

    @property
    def weights(self) -> BlendWeights:
        return BlendWeights(fixed=self.life_etf, glide_start=self.glide_start, glide_end=self.glide_end)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CompareConfig":
        if environ is None:
            load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        def _get(key: str, default: str) -> str:
            return environ.get(ENV_PREFIX + key, default)

        def _float(key: str, default: float) -> float:
            raw = environ.get(ENV_PREFIX + key)
            if raw is None or raw.strip() == "":
                return default
            try:
                return float(raw)
            except ValueError as e:
                raise ConfigError(f"{ENV_PREFIX + key} is not a number: {raw!r}") from e

        return cls(
            etf_symbol=_get("ETF", DEFAULT_ETF),
            index_symbol=_get("INDEX", DEFAULT_INDEX),
            start=_get("START", DEFAULT_START),
            interval=_get("INTERVAL", DEFAULT_INTERVAL),
            life_etf=_float("LIFE_ETF", DEFAULT_LIFE_ETF),
            glide_start=_float("GLIDE_START", DEFAULT_GLIDE_START),
            glide_end=_float("GLIDE_END", DEFAULT_GLIDE_END),
            base=_float("BASE", BASE),
        )
