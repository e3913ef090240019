"""Byte-based emissions model.

Implements the Sustainable Web Design per-byte calculation:
https://sustainablewebdesign.org/estimating-digital-emissions/

Transferred bytes are converted to energy (kWh per GB), the energy is split
across the system segments, and each segment is multiplied by a grid carbon
intensity. Green hosting swaps the data-centre intensity for the renewables one.
"""
import math
from dataclasses import dataclass
from typing import Dict

from sitecarbon.errors import ConfigurationError

BYTES_PER_GB = 1000 ** 3


@dataclass(frozen=True)
class EmissionsModel:
    kwh_per_gb: float = 0.81
    # Share of the energy per system segment (sums to 1.0)
    data_center_share: float = 0.15
    network_share: float = 0.14
    device_share: float = 0.52
    production_share: float = 0.19
    # gCO2 per kWh
    grid_intensity: float = 442.0
    renewable_intensity: float = 50.0
    # Conversion used for the reported energy figure
    kwh_per_gram: float = 0.0003

    def __post_init__(self):
        for name in (
            "kwh_per_gb", "data_center_share", "network_share", "device_share",
            "production_share", "grid_intensity", "renewable_intensity", "kwh_per_gram",
        ):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(f"{name} must be a finite non-negative number, got {value!r}")
        if self.renewable_intensity > self.grid_intensity:
            raise ConfigurationError("renewable_intensity must not exceed grid_intensity")

    @property
    def segment_shares(self) -> Dict[str, float]:
        return {
            "data_center": self.data_center_share,
            "network": self.network_share,
            "device": self.device_share,
            "production": self.production_share,
        }


DEFAULT_MODEL = EmissionsModel()


@dataclass(frozen=True)
class EmissionEstimate:
    grams_co2_per_load: float
    is_green_hosted: bool = False


def _check_bytes(byte_length: int) -> None:
    if byte_length < 0:
        raise ValueError(f"byte_length must be non-negative, got {byte_length}")


def energy_kwh(byte_length: int, model: EmissionsModel = DEFAULT_MODEL) -> float:
    """Energy in kWh needed to transfer ``byte_length`` bytes once."""
    _check_bytes(byte_length)
    return byte_length / BYTES_PER_GB * model.kwh_per_gb


def estimate_by_segment(
    byte_length: int,
    is_green_hosted: bool = False,
    model: EmissionsModel = DEFAULT_MODEL,
) -> Dict[str, float]:
    """Grams of CO2 per segment for a single load."""
    energy = energy_kwh(byte_length, model)
    segments = {}
    for segment, share in model.segment_shares.items():
        intensity = model.grid_intensity
        if segment == "data_center" and is_green_hosted:
            intensity = model.renewable_intensity
        segments[segment] = energy * share * intensity
    return segments


def estimate(
    byte_length: int,
    is_green_hosted: bool = False,
    model: EmissionsModel = DEFAULT_MODEL,
) -> float:
    """Grams of CO2 emitted by one load of ``byte_length`` bytes."""
    return sum(estimate_by_segment(byte_length, is_green_hosted, model).values())


def estimate_emissions(
    byte_length: int,
    is_green_hosted: bool = False,
    model: EmissionsModel = DEFAULT_MODEL,
) -> EmissionEstimate:
    return EmissionEstimate(
        grams_co2_per_load=estimate(byte_length, is_green_hosted, model),
        is_green_hosted=is_green_hosted,
    )


def energy_from_emissions(grams: float, model: EmissionsModel = DEFAULT_MODEL) -> float:
    """Reported energy consumption (kWh) for a per-load emission value."""
    return grams * model.kwh_per_gram
