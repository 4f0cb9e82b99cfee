from __future__ import annotations

import math
import sys
from typing import Any, Callable, Dict, Iterable, Mapping, Union

import numpy as np
import pandas as pd

from .models import (
    DEFAULT_ASSUMPTIONS,
    DimensioningResult,
    GSMParameters,
    LTEParameters,
    MicrowaveParameters,
    NetworkType,
    OpticalParameters,
    ParameterSet,
    PlanningAssumptions,
    UMTSParameters,
    parameters_from_wire,
)

# Upper bound on any site count; demands beyond it are reported at the cap.
MAX_SITES = 1_000_000_000


def parse_float(raw: Any, default: float = 0.0) -> float:
    """
    Parse a user-entered numeric value.

    Empty, non-numeric, NaN, infinite or out-of-range input falls back to
    `default`. A comma is accepted as decimal separator ("0,2").
    """
    if raw is None or isinstance(raw, bool):
        return float(default)
    if not isinstance(raw, (int, float)):
        raw = str(raw).strip().replace(",", ".")
    try:
        value = float(raw)
    except (ValueError, OverflowError):
        return float(default)
    if not math.isfinite(value):
        return float(default)
    return value


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves towards +inf (2.5 -> 3, -2.5 -> -2), unlike builtin round()."""
    factor = 10 ** ndigits
    scaled = value * factor
    # Non-finite values pass through; beyond 2**52 every float is already integral
    if not math.isfinite(scaled) or abs(scaled) >= 2 ** 52:
        return value
    return math.floor(scaled + 0.5) / factor


def format_number(value: float) -> str:
    """Render 11.0 as '11' and 11.3 as '11.3'."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _finite(value: float) -> float:
    """NaN becomes 0; overflowed values saturate at the largest float."""
    if math.isnan(value):
        return 0.0
    return max(-sys.float_info.max, min(sys.float_info.max, value))


def _ceil_sites(demand: float, per_site: float) -> int:
    if not (per_site > 0) or not (demand > 0):
        return 0
    ratio = demand / per_site
    if math.isnan(ratio):
        return 0
    if ratio >= MAX_SITES:
        return MAX_SITES
    return int(math.ceil(ratio))


def _coverage_pct(covered_km2: float, area_km2: float) -> int:
    if not (area_km2 > 0) or not (covered_km2 > 0):
        return 0
    pct = covered_km2 / area_km2 * 100
    if math.isnan(pct):
        return 0
    return int(round_half_up(min(100.0, pct)))


def compute_gsm(
    params: GSMParameters, assumptions: PlanningAssumptions = DEFAULT_ASSUMPTIONS
) -> DimensioningResult:
    """
    GSM sizing:
    - coverage-driven site count from circular cells
    - capacity-driven site count from busy-hour Erlangs
    - final count is the larger of the two
    """
    cell = assumptions.cellular
    cell_area = math.pi * params.radius * params.radius

    sites_for_coverage = _ceil_sites(params.area, cell_area)

    total_users = params.area * params.density * (params.penetration / 100)
    total_traffic = total_users * (params.traffic / 1000) * (params.busy_hour / 100)
    sites_for_capacity = _ceil_sites(total_traffic, cell.gsm_erlangs_per_site)

    sites = max(sites_for_coverage, sites_for_capacity)
    channels = sites * cell.gsm_channels_per_site * cell.gsm_timeslots_per_channel

    return DimensioningResult(
        network=NetworkType.GSM,
        sites=sites,
        capacity=float(channels),
        capacity_unit="canaux",
        capacity_label=f"{channels} canaux",
        coverage=_coverage_pct(sites * cell_area, params.area),
        cost=_finite(sites * assumptions.costs.gsm_site),
        metric_name="traffic",
        metric_value=_finite(round_half_up(total_traffic, 2)),
        metric_unit="Erl",
    )


def compute_umts(
    params: UMTSParameters, assumptions: PlanningAssumptions = DEFAULT_ASSUMPTIONS
) -> DimensioningResult:
    cell_area = math.pi * params.radius * params.radius
    sites = _ceil_sites(params.area, cell_area)
    capacity = _finite(sites * assumptions.cellular.umts_carrier_kbps * (params.load / 100))

    return DimensioningResult(
        network=NetworkType.UMTS,
        sites=sites,
        capacity=capacity,
        capacity_unit="kbps",
        capacity_label=f"{format_number(round_half_up(capacity))} kbps",
        coverage=_coverage_pct(sites * cell_area, params.area),
        cost=_finite(sites * assumptions.costs.umts_site),
        metric_name="throughput",
        metric_value=params.throughput,
        metric_unit="kbps",
    )


def compute_lte(
    params: LTEParameters, assumptions: PlanningAssumptions = DEFAULT_ASSUMPTIONS
) -> DimensioningResult:
    site_area = assumptions.cellular.lte_site_area_km2
    sites = _ceil_sites(params.area, site_area)
    capacity = _finite(sites * params.bandwidth * params.efficiency)

    return DimensioningResult(
        network=NetworkType.LTE,
        sites=sites,
        capacity=capacity,
        capacity_unit="Mbps",
        capacity_label=f"{format_number(round_half_up(capacity))} Mbps",
        coverage=_coverage_pct(sites * site_area, params.area),
        cost=_finite(sites * assumptions.costs.lte_site),
        metric_name="bandwidth",
        metric_value=params.bandwidth,
        metric_unit="MHz",
    )


def free_space_path_loss_db(distance_km: float, frequency_mhz: float) -> float:
    """
    FSPL (dB) = 32.45 + 20 log10(d_km) + 20 log10(f_MHz).

    Non-positive distance or frequency contributes 0 dB instead of -inf.
    """
    loss = 32.45
    if distance_km > 0:
        loss += 20 * math.log10(distance_km)
    if frequency_mhz > 0:
        loss += 20 * math.log10(frequency_mhz)
    return loss


def availability_pct(margin_db: float, assumptions: PlanningAssumptions = DEFAULT_ASSUMPTIONS) -> float:
    high, positive, degraded = assumptions.links.availability_tiers
    if margin_db > assumptions.links.microwave_high_margin_db:
        return high
    if margin_db > 0:
        return positive
    return degraded


def compute_microwave(
    params: MicrowaveParameters, assumptions: PlanningAssumptions = DEFAULT_ASSUMPTIONS
) -> DimensioningResult:
    """
    Microwave hop budget. Frequency is entered in GHz; the same antenna gain
    is applied at both ends.
    """
    fspl = free_space_path_loss_db(params.distance, params.frequency * 1000)
    received_dbm = params.power + params.gain + params.gain - fspl
    margin = _finite(received_dbm - assumptions.links.microwave_rx_sensitivity_dbm)
    availability = availability_pct(margin, assumptions)

    return DimensioningResult(
        network=NetworkType.MICROWAVE,
        sites=2,
        capacity=fspl,
        capacity_unit="dB pertes",
        capacity_label=f"{format_number(round_half_up(fspl))} dB pertes",
        coverage=int(round_half_up(min(100.0, availability))),
        cost=assumptions.costs.microwave_link,
        metric_name="margin",
        metric_value=round_half_up(margin, 1),
        metric_unit="dB",
        availability=availability,
    )


def compute_optical(
    params: OpticalParameters, assumptions: PlanningAssumptions = DEFAULT_ASSUMPTIONS
) -> DimensioningResult:
    links = assumptions.links
    total_loss = _finite(params.distance * params.attenuation + links.optical_connector_loss_db)
    received_dbm = params.power - total_loss
    margin = _finite(received_dbm - links.optical_rx_sensitivity_dbm)
    coverage = links.optical_coverage_ok if margin > 0 else links.optical_coverage_degraded

    return DimensioningResult(
        network=NetworkType.OPTICAL,
        sites=2,
        capacity=total_loss,
        capacity_unit="dB pertes",
        capacity_label=f"{format_number(round_half_up(total_loss, 1))} dB pertes",
        coverage=max(0, min(100, int(coverage))),
        cost=assumptions.costs.optical_link,
        metric_name="margin",
        metric_value=round_half_up(margin, 1),
        metric_unit="dB",
    )


CALCULATORS: Dict[NetworkType, Callable[..., DimensioningResult]] = {
    NetworkType.GSM: compute_gsm,
    NetworkType.UMTS: compute_umts,
    NetworkType.LTE: compute_lte,
    NetworkType.MICROWAVE: compute_microwave,
    NetworkType.OPTICAL: compute_optical,
}


def dimension(
    network: Union[str, NetworkType],
    params: Union[ParameterSet, Mapping[str, float], None] = None,
    assumptions: PlanningAssumptions = DEFAULT_ASSUMPTIONS,
) -> DimensioningResult:
    """
    Compute the full result set for one network.

    `params` may be a parameter model, a wire mapping (camelCase keys), or
    None for the startup defaults.
    """
    net = NetworkType.parse(network)
    if params is None or isinstance(params, Mapping):
        params = parameters_from_wire(net, dict(params or {}))
    return CALCULATORS[net](params, assumptions)


def sweep(
    network: Union[str, NetworkType],
    params: Union[ParameterSet, Mapping[str, float]],
    name: str,
    values: Iterable[float],
    assumptions: PlanningAssumptions = DEFAULT_ASSUMPTIONS,
) -> pd.DataFrame:
    """
    Recompute the result set while varying a single parameter.

    Returns one row per value with the swept value, sites, capacity,
    coverage, cost and the network-specific metric.
    """
    net = NetworkType.parse(network)
    if isinstance(params, Mapping):
        params = parameters_from_wire(net, dict(params))
    if name not in type(params).model_fields:
        raise KeyError(f"Unknown parameter '{name}' for network '{net.value}'")

    rows = []
    for v in np.asarray(list(values), dtype=float):
        r = dimension(net, params.model_copy(update={name: float(v)}), assumptions)
        rows.append(
            {
                name: float(v),
                "sites": r.sites,
                "capacity": r.capacity,
                "coverage": r.coverage,
                "cost": r.cost,
                r.metric_name: r.metric_value,
            }
        )
    return pd.DataFrame(rows)
