"""phpMyAdmin virtual host definition.

``define_vhost`` turns the parameters of one vhost resource into a
``Catalog``: the TLS files to materialise, an optional plain HTTP host that
redirects to HTTPS, and the primary host. Nothing is written here; the
catalog is handed to the apply layer.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pmavhost.models.config import PhpMyAdminConfig
from pmavhost.models.declarations import (
    Catalog,
    FileArtifact,
    InstallRequirement,
    RewriteRule,
    VHostDeclaration,
)
from pmavhost.models.vhost import (
    DEFAULT_OPTIONS,
    DEFAULT_SSL_CIPHER,
    DEFAULT_SSL_PROTOCOL,
    VHostSpec,
)
from pmavhost.utils.templates import render_packaged, render_template
from pmavhost.vhost.validate import validate_params


logger = logging.getLogger(__name__)

FRAGMENT_TEMPLATE = "phpmyadmin_fragment.conf.j2"
DENIED_SUBDIRS = ("setup", "libraries", "templates")
FILE_MODE = "0644"

HTTPS_REDIRECT = RewriteRule(
    comment="redirect non-SSL traffic to SSL site",
    condition="%{HTTPS} off",
    rule="(.*) https://%{HTTP_HOST}%{REQUEST_URI}",
)


def default_params(title: str, config: PhpMyAdminConfig) -> Dict[str, Any]:
    """Parameter defaults for a vhost titled ``title``."""
    params = config.params
    return {
        "ensure": "present",
        "vhost_enabled": True,
        "priority": "20",
        "docroot": params.docroot,
        "aliases": [],
        "vhost_name": title,
        "options": list(DEFAULT_OPTIONS),
        "ssl": False,
        "ssl_redirect": False,
        "ssl_cert": "",
        "ssl_key": "",
        "ssl_ca": None,
        "ssl_cert_file": "",
        "ssl_key_file": "",
        "ssl_ca_file": None,
        "ssl_protocol": DEFAULT_SSL_PROTOCOL,
        "ssl_cipher": DEFAULT_SSL_CIPHER,
        "conf_dir": params.conf_dir,
        "conf_dir_enable": params.conf_dir_enable,
    }


def build_spec(title: str, params: Mapping[str, Any], config: PhpMyAdminConfig) -> VHostSpec:
    """Validate ``params`` over the defaults and build the typed spec."""
    merged = default_params(title, config)
    merged.update(params)
    validate_params(merged)

    merged["ssl_cert_file"] = merged["ssl_cert_file"] or ""
    merged["ssl_key_file"] = merged["ssl_key_file"] or ""
    merged["ssl_ca_file"] = merged["ssl_ca_file"] or None
    merged["options"] = list(merged["options"])
    if not isinstance(merged["aliases"], str):
        merged["aliases"] = list(merged["aliases"])
    return VHostSpec(name=title, **merged)


def _resolve_material(
    spec: VHostSpec, label: str, inline: str, path: str, suffix: str
) -> Tuple[str, Optional[FileArtifact]]:
    """Resolve a cert or key: an explicit path wins over inline content."""
    if path:
        if inline:
            logger.warning(
                f"{spec.name}: both ssl_{label} and ssl_{label}_file given, "
                f"using {path}"
            )
        return path, None

    artifact = FileArtifact(
        path=spec.artifact_path(suffix),
        ensure=spec.ensure,
        mode=FILE_MODE,
        content=inline,
    )
    return artifact.path, artifact


def _resolve_ca(spec: VHostSpec) -> Tuple[Optional[str], Optional[FileArtifact]]:
    """Resolve the CA: inline content wins over an explicit path."""
    if spec.ssl_ca is not None:
        artifact = FileArtifact(
            path=spec.artifact_path("-ca.crt"),
            ensure=spec.ensure,
            mode=FILE_MODE,
            content=spec.ssl_ca,
        )
        return artifact.path, artifact
    if spec.ssl_ca_file:
        return spec.ssl_ca_file, None
    return None, None


def resolve_tls(spec: VHostSpec) -> Tuple[Dict[str, Optional[str]], List[FileArtifact]]:
    """Resolve certificate, key and CA paths and the files to materialise."""
    resolved: Dict[str, Optional[str]] = {"cert": None, "key": None, "ca": None}
    artifacts: List[FileArtifact] = []
    if not spec.ssl:
        return resolved, artifacts

    resolved["cert"], cert = _resolve_material(
        spec, "cert", spec.ssl_cert, spec.ssl_cert_file, ".crt"
    )
    resolved["key"], key = _resolve_material(
        spec, "key", spec.ssl_key, spec.ssl_key_file, ".key"
    )
    resolved["ca"], ca = _resolve_ca(spec)

    artifacts = [a for a in (cert, key, ca) if a is not None]
    return resolved, artifacts


def render_fragment(spec: VHostSpec, config: PhpMyAdminConfig) -> str:
    """Render the phpMyAdmin directory policy embedded in the primary host."""
    context = {
        "vhost_name": spec.vhost_name,
        "docroot": spec.docroot.rstrip("/") or "/",
        "options": spec.options,
        "ssl": spec.ssl,
        "denied": DENIED_SUBDIRS,
    }
    if config.params.fragment_template:
        return render_template(config.params.fragment_template, **context)
    return render_packaged(FRAGMENT_TEMPLATE, **context)


def _redirect_vhost(spec: VHostSpec, require: List[str]) -> VHostDeclaration:
    return VHostDeclaration(
        name=f"{spec.vhost_name}-http",
        server_name=spec.vhost_name,
        ensure=spec.ensure,
        enabled=spec.vhost_enabled,
        docroot=spec.docroot,
        priority=spec.priority,
        port=80,
        server_aliases=spec.server_aliases,
        options=spec.options,
        rewrites=[HTTPS_REDIRECT],
        conf_dir=spec.conf_dir,
        conf_dir_enable=spec.conf_dir_enable,
        require=require,
    )


def define_vhost(
    title: str, params: Mapping[str, Any], config: Optional[PhpMyAdminConfig] = None
) -> Catalog:
    """Declare the files and virtual hosts for one phpMyAdmin vhost.

    Raises a ``ValidationFailure`` subclass before declaring anything when a
    parameter is invalid.
    """
    config = config or PhpMyAdminConfig()
    spec = build_spec(title, params, config)

    install = InstallRequirement(
        package=config.params.package_name,
        docroot=config.params.docroot,
    )
    require = [install.ref]

    resolved, artifacts = resolve_tls(spec)
    files = [a.model_copy(update={"require": list(require)}) for a in artifacts]

    vhosts: List[VHostDeclaration] = []
    if spec.ssl and spec.ssl_redirect:
        vhosts.append(_redirect_vhost(spec, list(require)))

    primary = VHostDeclaration(
        name=spec.vhost_name,
        ensure=spec.ensure,
        enabled=spec.vhost_enabled,
        docroot=spec.docroot,
        priority=spec.priority,
        port=spec.port,
        server_aliases=spec.server_aliases,
        options=spec.options,
        ssl=spec.ssl,
        custom_fragment=render_fragment(spec, config),
        ssl_cert=resolved["cert"],
        ssl_key=resolved["key"],
        ssl_ca=resolved["ca"],
        ssl_honor_cipher_order="On",
        ssl_protocol=spec.ssl_protocol,
        ssl_cipher=spec.ssl_cipher,
        conf_dir=spec.conf_dir,
        conf_dir_enable=spec.conf_dir_enable,
        require=list(require) + [f.ref for f in files],
    )
    vhosts.append(primary)

    logger.debug(
        f"Defined vhost {title}: port {primary.port}, "
        f"{len(files)} file(s), {len(vhosts)} vhost(s)"
    )
    return Catalog(title=title, install=install, files=files, vhosts=vhosts)
