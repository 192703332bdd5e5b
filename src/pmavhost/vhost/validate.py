"""Parameter validation for vhost definitions.

Each check raises one of the ``ValidationFailure`` subclasses naming the
offending parameter. Values are type-checked strictly: ``"true"`` is not a
boolean and ``20`` is not a priority string.
"""

import posixpath
import re
from typing import Any, Mapping

from pmavhost.errors import InvalidPathError, InvalidTypeError, InvalidValueError


KNOWN_PARAMETERS = frozenset({
    "ensure",
    "vhost_enabled",
    "priority",
    "docroot",
    "aliases",
    "vhost_name",
    "options",
    "ssl",
    "ssl_redirect",
    "ssl_cert",
    "ssl_key",
    "ssl_ca",
    "ssl_cert_file",
    "ssl_key_file",
    "ssl_ca_file",
    "ssl_protocol",
    "ssl_cipher",
    "conf_dir",
    "conf_dir_enable",
})

ENSURE_VALUES = ("present", "absent")
PRIORITY_PATTERN = re.compile(r"[0-9]+")
# Anything that would split an Apache directive line
UNSAFE_TOKEN = re.compile(r"[\s\x00-\x1f\x7f]")
CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def _type_name(value: Any) -> str:
    return type(value).__name__


def validate_known(params: Mapping[str, Any]) -> None:
    """Reject parameter names the definition does not accept."""
    unknown = sorted(set(params) - KNOWN_PARAMETERS)
    if unknown:
        raise InvalidValueError(unknown[0], "unknown parameter")


def validate_ensure(name: str, value: Any) -> None:
    if value not in ENSURE_VALUES:
        raise InvalidValueError(
            name, f"must be one of {', '.join(ENSURE_VALUES)}, got {value!r}"
        )


def validate_bool(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise InvalidTypeError(name, f"expected a boolean, got {_type_name(value)}")


def validate_string(name: str, value: Any) -> None:
    # The value itself may be key material, so only its type is reported.
    if not isinstance(value, str):
        raise InvalidTypeError(name, f"expected a string, got {_type_name(value)}")


def validate_optional_string(name: str, value: Any) -> None:
    if value is not None:
        validate_string(name, value)


def validate_absolute_path(name: str, value: Any) -> None:
    if (
        not isinstance(value, str)
        or not posixpath.isabs(value)
        or CONTROL_CHARS.search(value)
    ):
        raise InvalidPathError(name, f"{value!r} is not an absolute path")


def validate_optional_path(name: str, value: Any) -> None:
    """Accept ``None`` or ``""`` as "not given", otherwise require absolute."""
    if value is None or value == "":
        return
    validate_absolute_path(name, value)


def validate_string_list(name: str, value: Any) -> None:
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise InvalidTypeError(name, "expected a list of strings")


def validate_aliases(name: str, value: Any) -> None:
    if isinstance(value, str):
        validate_token(name, value)
        return
    validate_string_list(name, value)
    for alias in value:
        validate_token(name, alias)


def validate_token(name: str, value: str) -> None:
    """Reject values that would break out of a single directive argument."""
    if UNSAFE_TOKEN.search(value):
        raise InvalidValueError(
            name, f"{value!r} must not contain whitespace or control characters"
        )


def validate_line(name: str, value: str) -> None:
    if CONTROL_CHARS.search(value):
        raise InvalidValueError(name, "must not contain control characters")


def validate_priority(name: str, value: Any) -> None:
    validate_string(name, value)
    if not PRIORITY_PATTERN.fullmatch(value):
        raise InvalidValueError(name, f"{value!r} is not a load-order integer")


def validate_vhost_name(name: str, value: str) -> None:
    """The name becomes part of file names and the ServerName directive."""
    if not value:
        raise InvalidValueError(name, "must not be empty")
    validate_token(name, value)
    if "/" in value or ".." in value:
        raise InvalidValueError(name, f"{value!r} must not contain '/' or '..'")


def validate_params(params: Mapping[str, Any]) -> None:
    """Validate fully defaulted parameters, first violation wins."""
    validate_known(params)

    validate_ensure("ensure", params["ensure"])

    for name in ("vhost_enabled", "ssl", "ssl_redirect"):
        validate_bool(name, params[name])

    validate_priority("priority", params["priority"])

    for name in ("docroot", "conf_dir", "conf_dir_enable"):
        validate_absolute_path(name, params[name])

    for name in ("vhost_name", "ssl_cert", "ssl_key", "ssl_protocol", "ssl_cipher"):
        validate_string(name, params[name])
    validate_vhost_name("vhost_name", params["vhost_name"])
    for name in ("ssl_protocol", "ssl_cipher"):
        validate_line(name, params[name])

    validate_aliases("aliases", params["aliases"])
    validate_string_list("options", params["options"])
    for option in params["options"]:
        validate_token("options", option)
    validate_optional_string("ssl_ca", params["ssl_ca"])

    for name in ("ssl_cert_file", "ssl_key_file", "ssl_ca_file"):
        validate_optional_path(name, params[name])
