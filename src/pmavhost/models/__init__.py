"""Pydantic models for configuration and declarations."""

from pmavhost.models.config import PhpMyAdminConfig, ParamsConfig, LoggingConfig
from pmavhost.models.declarations import (
    Catalog,
    FileArtifact,
    InstallRequirement,
    RewriteRule,
    VHostDeclaration,
)
from pmavhost.models.vhost import VHostSpec

__all__ = [
    "PhpMyAdminConfig",
    "ParamsConfig",
    "LoggingConfig",
    "Catalog",
    "FileArtifact",
    "InstallRequirement",
    "RewriteRule",
    "VHostDeclaration",
    "VHostSpec",
]
