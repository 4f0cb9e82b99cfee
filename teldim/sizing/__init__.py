"""
Dimensioning calculator.

Closed-form sizing of GSM, UMTS and LTE access networks and of point-to-point
microwave and optical links. Each network type maps a parameter set to a
fully recomputed result set (sites, capacity, coverage, cost, one extra metric).
"""

from .models import (
    DimensioningResult,
    NetworkType,
    PlanningAssumptions,
    UnknownNetworkError,
    default_parameters,
    parameters_from_wire,
)
from .sizer import dimension, parse_float, sweep
