"""
Input field metadata (label, unit, suggested bounds) per network type.

Bounds are UI hints only; the calculator never enforces them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .models import NetworkType


@dataclass(frozen=True)
class FieldSpec:
    name: str            # snake_case attribute on the parameter model
    key: str             # wire key (camelCase)
    label: str
    unit: str
    section: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    step: float = 1.0


FIELD_SPECS: Dict[NetworkType, List[FieldSpec]] = {
    NetworkType.GSM: [
        FieldSpec("area", "area", "Surface à couvrir", "km²", "Paramètres de Couverture"),
        FieldSpec("radius", "radius", "Rayon de cellule", "km", "Paramètres de Couverture", step=0.1),
        FieldSpec("density", "density", "Densité de population", "/km²", "Paramètres de Couverture"),
        FieldSpec("penetration", "penetration", "Taux de pénétration", "%", "Paramètres de Couverture", 1, 100),
        FieldSpec("traffic", "traffic", "Trafic par utilisateur", "mErl", "Paramètres de Trafic"),
        FieldSpec("busy_hour", "busyHour", "Heure chargée", "%", "Paramètres de Trafic", 1, 100),
        FieldSpec("frequency", "frequency", "Fréquence", "MHz", "Paramètres Radio", 800, 1900),
        FieldSpec("power", "power", "Puissance émission", "dBm", "Paramètres Radio", 20, 50),
    ],
    NetworkType.UMTS: [
        FieldSpec("area", "area", "Surface à couvrir", "km²", "Paramètres UMTS"),
        FieldSpec("radius", "radius", "Rayon de cellule", "km", "Paramètres UMTS", step=0.1),
        FieldSpec("throughput", "throughput", "Débit par utilisateur", "kbps", "Paramètres UMTS"),
        FieldSpec("load", "load", "Facteur de charge", "%", "Paramètres UMTS", 1, 100),
    ],
    NetworkType.LTE: [
        FieldSpec("area", "area", "Surface à couvrir", "km²", "Paramètres LTE"),
        FieldSpec("bandwidth", "bandwidth", "Largeur de bande", "MHz", "Paramètres LTE"),
        FieldSpec("throughput", "throughput", "Débit par utilisateur", "Mbps", "Paramètres LTE"),
        FieldSpec("efficiency", "efficiency", "Efficacité spectrale", "bps/Hz", "Paramètres LTE", step=0.1),
    ],
    NetworkType.MICROWAVE: [
        FieldSpec("distance", "distance", "Distance", "km", "Bilan de Liaison Hertzienne"),
        FieldSpec("frequency", "frequency", "Fréquence", "GHz", "Bilan de Liaison Hertzienne", step=0.1),
        FieldSpec("power", "power", "Puissance émission", "dBm", "Bilan de Liaison Hertzienne", 10, 50),
        FieldSpec("gain", "gain", "Gain antenne", "dBi", "Bilan de Liaison Hertzienne", 0, 60),
    ],
    NetworkType.OPTICAL: [
        FieldSpec("distance", "distance", "Distance", "km", "Bilan de Liaison Optique"),
        FieldSpec("wavelength", "wavelength", "Longueur d'onde", "nm", "Bilan de Liaison Optique", 1300, 1650),
        FieldSpec("power", "power", "Puissance émission", "dBm", "Bilan de Liaison Optique", -10, 20),
        FieldSpec(
            "attenuation", "attenuation", "Atténuation fibre", "dB/km", "Bilan de Liaison Optique",
            0.1, 1, step=0.01,
        ),
    ],
}


def field_specs(network: Union[str, NetworkType]) -> List[FieldSpec]:
    return FIELD_SPECS[NetworkType.parse(network)]


def find_field(network: Union[str, NetworkType], name: str) -> FieldSpec:
    """Look up a field by attribute name or wire key."""
    for spec in field_specs(network):
        if name in (spec.name, spec.key):
            return spec
    raise KeyError(f"Unknown parameter '{name}' for network '{NetworkType.parse(network).value}'")


def get_unit(network: Union[str, NetworkType], name: str) -> str:
    """Unit label for a parameter, '' when unknown."""
    try:
        return find_field(network, name).unit
    except KeyError:
        return ""
