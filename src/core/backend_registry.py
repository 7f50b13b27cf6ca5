"""
Registry of known scanning backends.

Maps each backend id accepted in the configuration to a factory building
the backend from its BackendEntry. The set is closed: only registered ids
can be enabled, everything else is ignored with a warning.
"""

import logging
from typing import Callable, Iterable, Optional

from constants import DEFAULT_HTTP_TIMEOUT
from core.models import BackendEntry
from core.scanner_interface import LayerSource, SecurityBackend
from integrations.clair import ClairBackend
from integrations.dummy import DummyBackend

logger = logging.getLogger(__name__)

BackendFactory = Callable[[BackendEntry, Optional[LayerSource]], SecurityBackend]


def _timeout_option(entry: BackendEntry) -> float:
    """Read the "timeout" option as a positive number of seconds."""
    value = entry.options.get("timeout", DEFAULT_HTTP_TIMEOUT)
    try:
        if isinstance(value, bool):
            raise ValueError(value)
        timeout = float(value)
    except (TypeError, ValueError):
        timeout = 0

    if not 0 < timeout < float("inf"):
        logger.warning(
            f"Invalid timeout {value!r} for backend '{entry.id}', "
            f"using {DEFAULT_HTTP_TIMEOUT}s"
        )
        return DEFAULT_HTTP_TIMEOUT
    return timeout


def _clair_factory(entry: BackendEntry, layer_source: Optional[LayerSource]) -> SecurityBackend:
    return ClairBackend(
        server=entry.server,
        layer_source=layer_source,
        timeout=_timeout_option(entry),
    )


def _dummy_factory(entry: BackendEntry, layer_source: Optional[LayerSource]) -> SecurityBackend:
    return DummyBackend(server=entry.server)


class BackendRegistry:
    """Known backend ids and how to build them."""

    def __init__(self) -> None:
        self._factories: dict[str, BackendFactory] = {}

    def register(self, backend_id: str, factory: BackendFactory) -> None:
        """
        Register a backend factory.

        Args:
            backend_id: Id used for the backend in the configuration
            factory: Callable building the backend from its entry

        Raises:
            ValueError: If the id is already registered
        """
        if backend_id in self._factories:
            raise ValueError(f"Backend '{backend_id}' is already registered")
        self._factories[backend_id] = factory
        logger.debug(f"Registered backend '{backend_id}'")

    def is_registered(self, backend_id: str) -> bool:
        return backend_id in self._factories

    @property
    def backend_ids(self) -> list[str]:
        return list(self._factories)

    def build(
        self,
        entries: Iterable[BackendEntry],
        layer_source: Optional[LayerSource] = None,
    ) -> list[tuple[str, SecurityBackend]]:
        """
        Build the enabled backends.

        Args:
            entries: Configured backends, in declaration order
            layer_source: Passed on to backends that download layers

        Returns:
            (backend id, backend) pairs for enabled, known entries, in
            declaration order
        """
        backends = []
        for entry in entries:
            if not entry.enabled:
                logger.debug(f"Backend '{entry.id}' is disabled")
                continue

            factory = self._factories.get(entry.id)
            if factory is None:
                logger.warning(f"Unknown security backend '{entry.id}', skipping")
                continue

            backends.append((entry.id, factory(entry, layer_source)))
        return backends


def default_registry() -> BackendRegistry:
    """Registry with every backend shipped with Layerwatch."""
    registry = BackendRegistry()
    registry.register("clair", _clair_factory)
    registry.register("dummy", _dummy_factory)
    return registry


__all__ = ["BackendRegistry", "BackendFactory", "default_registry"]
