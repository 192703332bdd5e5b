"""Install provider checking the base phpMyAdmin installation."""

import logging
from pathlib import Path

from pmavhost.errors import DependencyError
from pmavhost.models.declarations import InstallRequirement
from pmavhost.providers.base import BaseProvider, ProviderStatus


logger = logging.getLogger(__name__)


class InstallProvider(BaseProvider):
    """Reports whether the phpMyAdmin package files are in place.

    Installing the package belongs to the system package manager; this
    provider only checks that the requirement is met.
    """

    def initialize(self, config):
        """Initialize provider with configuration."""
        pass

    def status(self, spec: InstallRequirement) -> ProviderStatus:
        """PRESENT when the package docroot exists."""
        if Path(spec.docroot).is_dir():
            return ProviderStatus.PRESENT
        return ProviderStatus.ABSENT

    def present(self, spec: InstallRequirement) -> bool:
        """Fail unless the installation is already present."""
        if self.status(spec) != ProviderStatus.PRESENT:
            raise DependencyError(
                f"Package {spec.package} is not installed ({spec.docroot} missing)"
            )
        return False

    def absent(self, spec: InstallRequirement) -> bool:
        """Leave the installation alone; other vhosts may still use it."""
        logger.debug(f"Not removing package {spec.package}")
        return False

    def validate_spec(self, spec: InstallRequirement) -> bool:
        """Validate install requirement."""
        return bool(spec.package)
