from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

DTYPES = ("float32", "float64")


@dataclass
class YinSettings:
    threshold: float = 0.1
    freq_min: float = 75.0
    freq_max: float = 900.0
    sample_rate: int = 44100
    dtype: str = "float64"


@dataclass(frozen=True)
class EstimatorConfig:
    """Lag bounds and threshold used by every estimate call.

    ``tau_max`` bounds the lowest detectable pitch and ``tau_min`` the highest.
    """

    threshold: float
    tau_min: int
    tau_max: int
    sample_rate: int

    @classmethod
    def from_frequency_range(
        cls, threshold: float, freq_min: float, freq_max: float, sample_rate: int
    ) -> "EstimatorConfig":
        sample_rate = int(sample_rate)
        if sample_rate <= 0:
            raise ValueError("sample_rate must be positive")
        if not (math.isfinite(freq_min) and math.isfinite(freq_max)):
            raise ValueError("freq_min and freq_max must be finite")
        # frequencies are truncated to whole Hz before dividing
        hz_min = int(freq_min)
        hz_max = int(freq_max)
        if hz_min <= 0 or hz_max <= 0:
            raise ValueError("freq_min and freq_max must be at least 1 Hz")
        return cls(
            threshold=float(threshold),
            tau_min=sample_rate // hz_max,
            tau_max=sample_rate // hz_min,
            sample_rate=sample_rate,
        )

    @classmethod
    def from_settings(cls, settings: YinSettings) -> "EstimatorConfig":
        return cls.from_frequency_range(
            settings.threshold, settings.freq_min, settings.freq_max, settings.sample_rate
        )


def _coerce(field_name: str, value: Any) -> Any:
    for f in fields(YinSettings):
        if f.name != field_name:
            continue
        typ = f.type
        if typ in (int, "int"):
            return int(value)
        if typ in (float, "float"):
            return float(value)
        if typ in (str, "str"):
            text = str(value)
            if field_name == "dtype" and text not in DTYPES:
                raise ValueError(f"dtype must be one of {DTYPES}, got {text!r}")
            return text
        return value
    raise ValueError(f"unknown setting: {field_name}")


def save_preset(path: str | Path, settings: YinSettings) -> None:
    data = asdict(settings)
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, allow_unicode=True, sort_keys=False)


def load_preset(path: str | Path) -> YinSettings:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(file_path)

    with file_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    coerced = {name: _coerce(name, value) for name, value in data.items()}
    return YinSettings(**coerced)
