"""File provider for materialised TLS material."""

import logging
import os
from pathlib import Path

from pmavhost.errors import ProviderError
from pmavhost.models.declarations import FileArtifact
from pmavhost.providers.base import BaseProvider, ProviderStatus


logger = logging.getLogger(__name__)


class FileProvider(BaseProvider):
    """Provider for managing plain files with fixed content and mode."""

    def initialize(self, config):
        """Initialize provider with configuration."""
        # Files carry absolute paths, nothing to configure
        pass

    def status(self, spec: FileArtifact) -> ProviderStatus:
        """PRESENT only when the file exists with the declared content and mode."""
        path = Path(spec.path)
        if not path.exists():
            return ProviderStatus.ABSENT
        try:
            if path.read_text() != spec.content:
                return ProviderStatus.UNKNOWN
            if (path.stat().st_mode & 0o7777) != int(spec.mode, 8):
                return ProviderStatus.UNKNOWN
        except OSError as e:
            logger.error(f"Error checking file {spec.path}: {e}")
            return ProviderStatus.ERROR
        return ProviderStatus.PRESENT

    def present(self, spec: FileArtifact) -> bool:
        """Write the file with the declared content and mode."""
        if self.status(spec) == ProviderStatus.PRESENT:
            logger.debug(f"File {spec.path} already in place")
            return False

        path = Path(spec.path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # chmod also covers files that already existed
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, int(spec.mode, 8))
            with os.fdopen(fd, "w") as f:
                f.write(spec.content)
            os.chmod(path, int(spec.mode, 8))
        except OSError as e:
            logger.error(f"Failed to write {spec.path}: {e}")
            raise ProviderError(f"Failed to write {spec.path}: {e}") from e

        logger.info(f"Wrote {spec.path} (mode {spec.mode})")
        return True

    def absent(self, spec: FileArtifact) -> bool:
        """Remove the file."""
        path = Path(spec.path)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.error(f"Failed to remove {spec.path}: {e}")
            raise ProviderError(f"Failed to remove {spec.path}: {e}") from e

        logger.info(f"Removed {spec.path}")
        return True

    def validate_spec(self, spec: FileArtifact) -> bool:
        """Validate file specification."""
        if not os.path.isabs(spec.path):
            logger.error(f"File path {spec.path} is not absolute")
            return False
        try:
            int(spec.mode, 8)
        except ValueError:
            logger.error(f"File {spec.path} has invalid mode {spec.mode}")
            return False
        return True
