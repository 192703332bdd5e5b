"""phpMyAdmin virtual host definition."""

from pmavhost.vhost.definition import define_vhost, build_spec, resolve_tls

__all__ = [
    "define_vhost",
    "build_spec",
    "resolve_tls",
]
