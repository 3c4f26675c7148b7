"""Network: reachability of the NAS host."""

from __future__ import annotations

from src.application.models.monitoring_config import MonitoringConfig
from src.domain.entities.probe import Fact
from src.domain.entities.status import SubsystemKind, SubsystemState, SubsystemStatus
from src.domain.ports.probes import IReachabilityProbe

from .base import Metrics, SubsystemCollector


class NetworkCollector(SubsystemCollector):
    kind = SubsystemKind.NETWORK

    def __init__(
        self, config: MonitoringConfig, reachability_probe: IReachabilityProbe
    ) -> None:
        super().__init__(config)
        self._reachability_probe = reachability_probe

    async def _collect(self) -> SubsystemStatus:
        host = self._config.nas_host
        outcome = await self._reachability_probe.query(host, self._timeouts.ping)

        metrics: Metrics = {"host": host, "interface": self._config.network_interface}
        state = SubsystemState.STOPPED
        if isinstance(outcome, Fact):
            metrics["reachable"] = outcome.value.reachable
            if outcome.value.reachable:
                state = SubsystemState.RUNNING

        return self._status(state, metrics, primary=[("reachability", outcome)])
