"""Registry of initialized protocol instances.

The registry is built from a list of factories. Each build produces a new
read-only mapping that replaces the previous one in a single assignment, so
readers holding a snapshot never see a half-built registry.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterator, Mapping, Optional, Sequence

from swapintents.config import Settings
from swapintents.protocols.base import IntentProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProtocolFactory:
    """Knows how to build one protocol from settings.

    Opt-in factories are skipped unless the inclusion list names them.
    """

    identifier: str
    create: Callable[[Settings], IntentProtocol]
    opt_in: bool = False


class ProtocolRegistry:
    """Maps protocol identifiers to live protocol instances."""

    def __init__(self, factories: Sequence[ProtocolFactory], settings: Settings):
        self._factories: tuple[ProtocolFactory, ...] = tuple(factories)
        self._settings = settings
        self._protocols: Mapping[str, IntentProtocol] = MappingProxyType({})
        self.initialize(settings)

    @property
    def settings(self) -> Settings:
        return self._settings

    def is_enabled(self, factory: ProtocolFactory, settings: Settings) -> bool:
        """Apply exclusion, inclusion and opt-in rules (exclusion wins)."""
        if factory.identifier in settings.exclude_protocols:
            return False
        if settings.include_protocols is not None:
            return factory.identifier in settings.include_protocols
        return not factory.opt_in

    def initialize(self, settings: Optional[Settings] = None) -> None:
        """Build every enabled protocol and swap in the new mapping.

        Protocols that fail to construct or reject the settings are skipped.
        """
        settings = settings or self._settings
        protocols: dict[str, IntentProtocol] = {}

        for factory in self._factories:
            if not self.is_enabled(factory, settings):
                logger.debug(f"Protocol {factory.identifier} disabled by configuration")
                continue

            if factory.identifier in protocols:
                logger.warning(f"Duplicate protocol factory ignored: {factory.identifier}")
                continue

            instance = self._create_safely(factory, settings)
            if instance is not None:
                protocols[factory.identifier] = instance
                logger.debug(f"Initialized protocol: {factory.identifier}")

        self._settings = settings
        self._protocols = MappingProxyType(protocols)
        logger.info(f"Initialized {len(protocols)} protocols")

    def rebuild(self, settings: Optional[Settings] = None) -> None:
        """Rebuild from scratch, e.g. after inclusion/exclusion changes."""
        logger.info("Rebuilding protocol registry")
        self.initialize(settings)

    def _create_safely(
        self, factory: ProtocolFactory, settings: Settings
    ) -> Optional[IntentProtocol]:
        try:
            instance = factory.create(settings)

            if instance.protocol != factory.identifier:
                logger.warning(
                    f"Skipping protocol {factory.identifier}: instance reports "
                    f"identifier {instance.protocol!r}"
                )
                return None

            if not instance.is_correct_config(settings):
                logger.debug(f"Skipping protocol {factory.identifier} due to invalid config")
                return None

            return instance
        except Exception as e:
            logger.warning(
                f"Failed to initialize protocol {factory.identifier}: {type(e).__name__}: {e}"
            )
            return None

    def snapshot(self) -> Mapping[str, IntentProtocol]:
        """Current read-only mapping."""
        return self._protocols

    @property
    def identifiers(self) -> list[str]:
        return list(self._protocols)

    def get(self, identifier: str) -> Optional[IntentProtocol]:
        return self._protocols.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._protocols

    def __iter__(self) -> Iterator[IntentProtocol]:
        return iter(self._protocols.values())

    def __len__(self) -> int:
        return len(self._protocols)
