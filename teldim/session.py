"""
Dimensioning Session
====================

Owns the parameter sets of all five network types and keeps the result set
of the active network current. Every mutation (parameter update, network
selection, parameter reload) triggers an immediate full recompute; observers
registered with `subscribe` are notified with the new result set.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .sizing.models import (
    DEFAULT_ASSUMPTIONS,
    DimensioningResult,
    NetworkType,
    ParameterSet,
    PlanningAssumptions,
    default_parameters,
    parameters_from_wire,
)
from .sizing.fields import find_field
from .sizing.sizer import dimension, parse_float

logger = logging.getLogger(__name__)

ResultCallback = Callable[[DimensioningResult], None]


class DimensioningSession:
    """
    In-memory parameter state with recompute-on-mutation.

    Attributes:
        network: Active network type
        parameters: Parameter set per network type (startup defaults)
        results: Result set of the active network
        assumptions: Planning constants used by the calculator
    """

    def __init__(
        self,
        network: Union[str, NetworkType] = NetworkType.GSM,
        assumptions: PlanningAssumptions = DEFAULT_ASSUMPTIONS,
    ):
        self.assumptions = assumptions
        self.parameters: Dict[NetworkType, ParameterSet] = {
            net: default_parameters(net) for net in NetworkType
        }
        self.network = NetworkType.parse(network)
        self._observers: List[ResultCallback] = []
        self.results: DimensioningResult = self.recompute()

    @property
    def active_parameters(self) -> ParameterSet:
        return self.parameters[self.network]

    def subscribe(self, callback: ResultCallback) -> Callable[[], None]:
        """Register an observer; returns a function that unregisters it."""
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def recompute(self) -> DimensioningResult:
        self.results = dimension(self.network, self.active_parameters, self.assumptions)
        logger.debug(
            "Recomputed %s: sites=%d capacity=%s coverage=%d%%",
            self.network.value, self.results.sites, self.results.capacity_label, self.results.coverage,
        )
        for callback in list(self._observers):
            callback(self.results)
        return self.results

    def select(self, network: Union[str, NetworkType]) -> DimensioningResult:
        """Switch the active network type and recompute."""
        self.network = NetworkType.parse(network)
        return self.recompute()

    def update_parameter(self, name: str, raw: Any) -> DimensioningResult:
        """
        Set one parameter of the active network from raw user input.

        `name` may be the attribute name or the camelCase wire key. Input
        that does not parse as a number is stored as 0.
        """
        spec = find_field(self.network, name)
        value = parse_float(raw)
        self.parameters[self.network] = self.active_parameters.model_copy(update={spec.name: value})
        return self.recompute()

    def replace_parameters(
        self,
        network: Union[str, NetworkType],
        params: Union[ParameterSet, Mapping[str, Any]],
    ) -> Optional[DimensioningResult]:
        """
        Load a complete parameter set (e.g. from a saved snapshot).

        Recomputes only when `network` is the active one.
        """
        net = NetworkType.parse(network)
        if isinstance(params, Mapping):
            params = parameters_from_wire(net, dict(params))
        self.parameters[net] = params
        if net == self.network:
            return self.recompute()
        return None

    def reset(self, network: Union[str, NetworkType, None] = None) -> DimensioningResult:
        """Restore startup defaults for one network (the active one by default)."""
        net = self.network if network is None else NetworkType.parse(network)
        self.parameters[net] = default_parameters(net)
        return self.recompute()
