"""Applies vhost catalogs through the providers."""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from pmavhost.errors import ProviderError
from pmavhost.models.declarations import Catalog
from pmavhost.providers import ProviderRegistry, ProviderStatus


logger = logging.getLogger(__name__)


@dataclass
class ApplyResult:
    """Outcome of applying one catalog."""
    title: str
    changed: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def is_changed(self) -> bool:
        return bool(self.changed)


class StateEngine:
    """Converges declarations in dependency order."""

    def __init__(self, provider_registry: ProviderRegistry):
        """Initialize state engine."""
        self.provider_registry = provider_registry

    def _provider(self, name: str):
        provider = self.provider_registry.get_provider(name)
        if provider is None:
            raise ProviderError(f"Provider {name} not found")
        return provider

    def _ordered(self, catalog: Catalog) -> List[Tuple[str, object]]:
        """Files before the hosts that reference them; reversed on removal."""
        resources: List[Tuple[str, object]] = [("file", f) for f in catalog.files]
        resources += [("vhost", v) for v in catalog.vhosts]
        if catalog.ensure == "absent":
            resources.reverse()
        return resources

    def apply(self, catalog: Catalog, dry_run: bool = False) -> ApplyResult:
        """Apply a catalog and report which resources changed."""
        result = ApplyResult(title=catalog.title, dry_run=dry_run)
        logger.info(f"Applying vhost {catalog.title} (ensure={catalog.ensure})")

        if catalog.ensure == "present":
            install = self._provider("install")
            if not dry_run:
                install.present(catalog.install)
            elif install.status(catalog.install) != ProviderStatus.PRESENT:
                logger.warning(f"{catalog.install.ref} is not satisfied")

        for kind, spec in self._ordered(catalog):
            provider = self._provider(kind)
            if not provider.validate_spec(spec):
                raise ProviderError(f"Invalid {spec.ref} in vhost {catalog.title}")

            if dry_run:
                status = provider.status(spec)
                wanted = ProviderStatus.PRESENT if spec.ensure == "present" else ProviderStatus.ABSENT
                target = result.changed if status != wanted else result.unchanged
                target.append(spec.ref)
                continue

            try:
                if spec.ensure == "present":
                    changed = provider.present(spec)
                else:
                    changed = provider.absent(spec)
            except ProviderError:
                raise
            except Exception as e:
                logger.error(f"Failed to apply {spec.ref}: {e}", exc_info=True)
                raise ProviderError(f"Failed to apply {spec.ref}: {e}") from e

            (result.changed if changed else result.unchanged).append(spec.ref)

        logger.info(
            f"Vhost {catalog.title}: {len(result.changed)} changed, "
            f"{len(result.unchanged)} unchanged"
        )
        return result
