from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field


class UnknownNetworkError(ValueError):
    """Raised when a network identifier is not one of the five supported types."""


class NetworkType(str, Enum):
    """Network types the calculator can dimension."""
    GSM = "gsm"
    UMTS = "umts"
    LTE = "lte"
    MICROWAVE = "hertzien"
    OPTICAL = "optique"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @classmethod
    def parse(cls, value: Union[str, "NetworkType"]) -> "NetworkType":
        """Case-insensitive lookup by id, display name or English alias."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownNetworkError(
                f"Unknown network type '{value}' (expected one of: "
                + ", ".join(n.value for n in cls) + ")"
            ) from None


_DISPLAY_NAMES = {
    NetworkType.GSM: "GSM",
    NetworkType.UMTS: "UMTS",
    NetworkType.LTE: "LTE",
    NetworkType.MICROWAVE: "Hertzien",
    NetworkType.OPTICAL: "Optique",
}

_ICONS = {
    NetworkType.GSM: "📶",
    NetworkType.UMTS: "📡",
    NetworkType.LTE: "🚀",
    NetworkType.MICROWAVE: "📻",
    NetworkType.OPTICAL: "💡",
}

_ALIASES = {
    "microwave": "hertzien",
    "optical": "optique",
    "fiber": "optique",
}


class _ParameterSet(BaseModel):
    # camelCase keys on the wire, snake_case attributes in Python
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, float]:
        return self.model_dump(by_alias=True)


class GSMParameters(_ParameterSet):
    area: float = Field(100.0, description="Surface to cover (km²).")
    radius: float = Field(2.0, description="Cell radius (km).")
    density: float = Field(1000.0, description="Population density (inhabitants/km²).")
    penetration: float = Field(80.0, description="Subscriber penetration rate (%).")
    traffic: float = Field(25.0, description="Busy-hour traffic per subscriber (mErl).")
    busy_hour: float = Field(15.0, alias="busyHour", description="Share of traffic in the busy hour (%).")
    frequency: float = Field(900.0, description="Carrier frequency (MHz).")
    power: float = Field(43.0, description="BTS transmit power (dBm).")


class UMTSParameters(_ParameterSet):
    area: float = Field(100.0, description="Surface to cover (km²).")
    radius: float = Field(1.5, description="Cell radius (km).")
    throughput: float = Field(384.0, description="Throughput per user (kbps).")
    load: float = Field(70.0, description="Cell load factor (%).")


class LTEParameters(_ParameterSet):
    area: float = Field(100.0, description="Surface to cover (km²).")
    bandwidth: float = Field(20.0, description="Channel bandwidth (MHz).")
    throughput: float = Field(5.0, description="Throughput per user (Mbps).")
    efficiency: float = Field(3.0, description="Spectral efficiency (bps/Hz).")


class MicrowaveParameters(_ParameterSet):
    distance: float = Field(30.0, description="Hop length (km).")
    frequency: float = Field(6.0, description="Carrier frequency (GHz).")
    power: float = Field(30.0, description="Transmit power (dBm).")
    gain: float = Field(35.0, description="Antenna gain, same at both ends (dBi).")


class OpticalParameters(_ParameterSet):
    distance: float = Field(40.0, description="Fiber length (km).")
    wavelength: float = Field(1550.0, description="Wavelength (nm).")
    power: float = Field(5.0, description="Transmit power (dBm), may be negative.")
    attenuation: float = Field(0.2, description="Fiber attenuation (dB/km).")


ParameterSet = Union[
    GSMParameters, UMTSParameters, LTEParameters, MicrowaveParameters, OpticalParameters
]

PARAMETER_MODELS: Dict[NetworkType, Type[_ParameterSet]] = {
    NetworkType.GSM: GSMParameters,
    NetworkType.UMTS: UMTSParameters,
    NetworkType.LTE: LTEParameters,
    NetworkType.MICROWAVE: MicrowaveParameters,
    NetworkType.OPTICAL: OpticalParameters,
}


def default_parameters(network: Union[str, NetworkType]) -> ParameterSet:
    """Fresh parameter set with the startup defaults for `network`."""
    return PARAMETER_MODELS[NetworkType.parse(network)]()


def parameters_from_wire(network: Union[str, NetworkType], data: Dict[str, float]) -> ParameterSet:
    """Validate a camelCase (or snake_case) mapping into the network's parameter model."""
    return PARAMETER_MODELS[NetworkType.parse(network)].model_validate(data)


class CellularAssumptions(BaseModel):
    gsm_channels_per_site: int = Field(8, ge=1, description="TRX channels assumed per GSM site.")
    gsm_timeslots_per_channel: int = Field(8, ge=1, description="Timeslots per GSM channel.")
    gsm_erlangs_per_site: float = Field(
        8.0, gt=0, description="Busy-hour traffic one GSM site can carry (Erl)."
    )
    umts_carrier_kbps: float = Field(2048.0, gt=0, description="Nominal UMTS cell rate (kbps).")
    lte_site_area_km2: float = Field(7.0, gt=0, description="Area served by one LTE site (km²).")


class LinkAssumptions(BaseModel):
    microwave_rx_sensitivity_dbm: float = Field(-90.0, description="Microwave receiver sensitivity (dBm).")
    microwave_high_margin_db: float = Field(10.0, description="Margin above which the top availability tier applies.")
    availability_tiers: Tuple[float, float, float] = Field(
        (99.9, 99.0, 95.0), description="Availability (%) for high margin, positive margin, otherwise."
    )
    optical_connector_loss_db: float = Field(3.0, description="Connector and splice budget (dB).")
    optical_rx_sensitivity_dbm: float = Field(-25.0, description="Optical receiver sensitivity (dBm).")
    optical_coverage_ok: int = Field(100, description="Coverage proxy when the optical margin is positive.")
    optical_coverage_degraded: int = Field(50, description="Coverage proxy otherwise.")


class CostAssumptions(BaseModel):
    currency: str = Field("FCFA", description="Currency label used in reports.")
    gsm_site: float = Field(90_000_000, ge=0, description="Cost of one GSM site.")
    umts_site: float = Field(120_000_000, ge=0, description="Cost of one UMTS site.")
    lte_site: float = Field(180_000_000, ge=0, description="Cost of one LTE site.")
    microwave_link: float = Field(30_000_000, ge=0, description="Cost of one microwave hop (two sites).")
    optical_link: float = Field(15_000_000, ge=0, description="Cost of one optical link (two sites).")


class PlanningAssumptions(BaseModel):
    cellular: CellularAssumptions = Field(default_factory=CellularAssumptions)
    links: LinkAssumptions = Field(default_factory=LinkAssumptions)
    costs: CostAssumptions = Field(default_factory=CostAssumptions)


DEFAULT_ASSUMPTIONS = PlanningAssumptions()


def load_assumptions(path: Union[str, Path]) -> PlanningAssumptions:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Assumptions JSON not found: {path}")
    return PlanningAssumptions.model_validate_json(p.read_text(encoding="utf-8"))


class DimensioningResult(BaseModel):
    """Derived, read-only result set for one network."""
    model_config = ConfigDict(frozen=True)

    network: NetworkType
    sites: int = Field(..., ge=0)
    capacity: float
    capacity_unit: str
    capacity_label: str
    coverage: int = Field(..., ge=0, le=100)
    cost: float
    metric_name: str
    metric_value: float
    metric_unit: str
    availability: Optional[float] = None
