"""
phpMyAdmin vhost - declarative Apache virtual hosts for phpMyAdmin.

Validates vhost parameters, resolves TLS material and produces the file and
virtual host declarations an apply layer converges.
"""

__version__ = "1.0.0"

from pmavhost.models.config import PhpMyAdminConfig
from pmavhost.models.declarations import Catalog
from pmavhost.vhost.definition import define_vhost

__all__ = [
    "PhpMyAdminConfig",
    "Catalog",
    "define_vhost",
]
