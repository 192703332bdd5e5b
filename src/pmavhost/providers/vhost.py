"""Vhost provider rendering Apache site configurations."""

import logging
from pathlib import Path

from pmavhost.errors import ProviderError
from pmavhost.models.declarations import VHostDeclaration
from pmavhost.providers.base import BaseProvider, ProviderStatus
from pmavhost.utils.templates import render_packaged


logger = logging.getLogger(__name__)

VHOST_TEMPLATE = "vhost.conf.j2"


class VHostProvider(BaseProvider):
    """Provider for Apache virtual host files.

    The site file is written to ``conf_dir``. When ``conf_dir_enable`` is a
    separate directory (Debian's ``sites-enabled``), an enabled host is
    linked into it and a disabled host is unlinked.
    """

    def initialize(self, config):
        """Initialize provider with configuration."""
        # Directories travel on each declaration
        pass

    def site_path(self, spec: VHostDeclaration) -> Path:
        return Path(spec.conf_dir) / spec.filename

    def enabled_path(self, spec: VHostDeclaration) -> Path:
        return Path(spec.conf_dir_enable) / spec.filename

    def _links_enabled(self, spec: VHostDeclaration) -> bool:
        return Path(spec.conf_dir_enable) != Path(spec.conf_dir)

    def render(self, spec: VHostDeclaration) -> str:
        """Render the site configuration."""
        return render_packaged(VHOST_TEMPLATE, vhost=spec)

    def is_enabled(self, spec: VHostDeclaration) -> bool:
        """Return True when the enable link points at the site file."""
        if not self._links_enabled(spec):
            return self.site_path(spec).exists()
        target = self.enabled_path(spec)
        try:
            return target.is_symlink() and target.resolve() == self.site_path(spec).resolve()
        except OSError:
            return False

    def status(self, spec: VHostDeclaration) -> ProviderStatus:
        """Check whether the rendered site and its enable link match."""
        path = self.site_path(spec)
        if not path.exists():
            return ProviderStatus.ABSENT
        try:
            if path.read_text() != self.render(spec):
                return ProviderStatus.UNKNOWN
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            return ProviderStatus.ERROR
        if self._links_enabled(spec) and self.is_enabled(spec) != spec.enabled:
            return ProviderStatus.UNKNOWN
        return ProviderStatus.PRESENT

    def present(self, spec: VHostDeclaration) -> bool:
        """Write the site file and bring the enable link in line."""
        if self.status(spec) == ProviderStatus.PRESENT:
            logger.debug(f"Vhost {spec.name} already in place")
            return False

        path = self.site_path(spec)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.render(spec))
            if self._links_enabled(spec):
                if spec.enabled:
                    self._enable(spec)
                else:
                    self._disable(spec)
        except OSError as e:
            logger.error(f"Failed to write vhost {spec.name}: {e}")
            raise ProviderError(f"Failed to write vhost {spec.name}: {e}") from e

        logger.info(f"Wrote vhost {spec.name} to {path}")
        return True

    def absent(self, spec: VHostDeclaration) -> bool:
        """Remove the enable link and the site file."""
        changed = False
        try:
            if self._links_enabled(spec):
                changed = self._disable(spec)
            path = self.site_path(spec)
            if path.exists():
                path.unlink()
                changed = True
        except OSError as e:
            logger.error(f"Failed to remove vhost {spec.name}: {e}")
            raise ProviderError(f"Failed to remove vhost {spec.name}: {e}") from e

        if changed:
            logger.info(f"Removed vhost {spec.name}")
        return changed

    def validate_spec(self, spec: VHostDeclaration) -> bool:
        """Validate vhost specification."""
        if Path(spec.filename).name != spec.filename:
            logger.error(f"Vhost {spec.name} file name {spec.filename!r} leaves its directory")
            return False
        if spec.ssl and not (spec.ssl_cert and spec.ssl_key):
            logger.error(f"Vhost {spec.name} enables SSL without certificate and key")
            return False
        return True

    def _enable(self, spec: VHostDeclaration) -> bool:
        source = self.site_path(spec)
        target = self.enabled_path(spec)
        if self.is_enabled(spec):
            return False
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.exists() or target.is_symlink():
            target.unlink()
        target.symlink_to(source)
        return True

    def _disable(self, spec: VHostDeclaration) -> bool:
        target = self.enabled_path(spec)
        if not target.is_symlink():
            return False
        target.unlink()
        return True
