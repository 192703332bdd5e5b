"""Configuration models."""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


OS_FAMILY_DEFAULTS = {
    "Debian": {
        "package_name": "phpmyadmin",
        "conf_dir": "/etc/apache2/sites-available",
        "conf_dir_enable": "/etc/apache2/sites-enabled",
    },
    "RedHat": {
        "package_name": "phpMyAdmin",
        "conf_dir": "/etc/httpd/conf.d",
        "conf_dir_enable": "/etc/httpd/conf.d",
    },
}


class ParamsConfig(BaseModel):
    """Defaults the vhost definition falls back to."""
    model_config = ConfigDict(extra="forbid")

    osfamily: Literal["Debian", "RedHat"] = Field(default="Debian")
    package_name: Optional[str] = None
    docroot: str = Field(default="/usr/share/phpmyadmin")
    conf_dir: Optional[str] = None
    conf_dir_enable: Optional[str] = None
    fragment_template: Optional[str] = Field(
        None, description="Jinja2 source replacing the packaged fragment template"
    )

    @model_validator(mode="after")
    def fill_os_defaults(self):
        """Fill unset OS-dependent fields from the OS family."""
        for key, value in OS_FAMILY_DEFAULTS[self.osfamily].items():
            if getattr(self, key) is None:
                setattr(self, key, value)
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()


class PhpMyAdminConfig(BaseModel):
    """Main configuration model."""
    model_config = ConfigDict(extra="ignore")

    params: ParamsConfig = Field(default_factory=ParamsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
