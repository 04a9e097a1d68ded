"""
Mailer configuration.

Resolves caller overrides against defaults once, at construction time.
The resolved MailerConfig is immutable and shared by every send of a Mailer.

Environment variables (read only by config_from_env):
- LOCALEMAIL_OUTPUT_DIR: output root (default ./localemail)
- LOCALEMAIL_FILE_NAME_TEMPLATE: filename template (default %ts_%s)
- LOCALEMAIL_IGNORE_TEXT / _HTML / _JSON: suppress .txt / .html / .json files
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = './localemail'
DEFAULT_FILE_NAME_TEMPLATE = '%ts_%s'

_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class SuppressOptions:
    """
    Per-format suppression flags.

    Attributes:
        text: If True, no .txt file is written
        html: If True, no .html file is written
        json: If True, no .json file is written
    """
    text: bool = False
    html: bool = False
    json: bool = True


@dataclass(frozen=True)
class MailerConfig:
    """
    Fully resolved mailer configuration.

    Attributes:
        output_dir: Root directory holding one folder per recipient
        file_name_template: Filename pattern, see services.template
        suppress: Which artifact formats are skipped
    """
    output_dir: str = DEFAULT_OUTPUT_DIR
    file_name_template: str = DEFAULT_FILE_NAME_TEMPLATE
    suppress: SuppressOptions = field(default_factory=SuppressOptions)


def _flag(overrides: Mapping[str, Any], key: str, default: bool) -> bool:
    """Suppression flag from overrides; a missing or None value keeps the default."""
    value = overrides.get(key)
    if value is None:
        return default
    return bool(value)


def resolve_config(
    output_dir: Optional[str] = None,
    file_name_template: Optional[str] = None,
    ignore_create_files: Optional[Mapping[str, Any]] = None
) -> MailerConfig:
    """
    Merge overrides with defaults.

    The template is not validated; unknown placeholders pass through literally.

    Args:
        output_dir: Output root (default ./localemail)
        file_name_template: Filename template (default %ts_%s)
        ignore_create_files: Partial mapping with "text", "html", "json" keys;
            missing keys keep their defaults

    Returns:
        MailerConfig: Immutable resolved configuration

    Example:
        >>> resolve_config(ignore_create_files={'json': False}).suppress
        SuppressOptions(text=False, html=False, json=False)
    """
    defaults = SuppressOptions()
    ignore = ignore_create_files or {}

    return MailerConfig(
        output_dir=output_dir if output_dir is not None else DEFAULT_OUTPUT_DIR,
        file_name_template=(
            file_name_template if file_name_template is not None else DEFAULT_FILE_NAME_TEMPLATE
        ),
        suppress=SuppressOptions(
            text=_flag(ignore, 'text', defaults.text),
            html=_flag(ignore, 'html', defaults.html),
            json=_flag(ignore, 'json', defaults.json),
        ),
    )


def _read_flag(environ: Mapping[str, str], name: str) -> Optional[bool]:
    """Read a boolean env var; None when unset so the default applies."""
    raw = environ.get(name)
    if raw is None or raw.strip() == '':
        return None
    return raw.strip().lower() in _TRUTHY


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> MailerConfig:
    """
    Build a MailerConfig from LOCALEMAIL_* environment variables.

    Args:
        environ: Mapping to read from (default os.environ)

    Returns:
        MailerConfig: Resolved configuration
    """
    if environ is None:
        environ = os.environ

    ignore = {}
    for key in ('text', 'html', 'json'):
        flag = _read_flag(environ, f"LOCALEMAIL_IGNORE_{key.upper()}")
        if flag is not None:
            ignore[key] = flag

    config = resolve_config(
        output_dir=environ.get('LOCALEMAIL_OUTPUT_DIR') or None,
        file_name_template=environ.get('LOCALEMAIL_FILE_NAME_TEMPLATE') or None,
        ignore_create_files=ignore,
    )
    logger.info(
        f"Mailer configured from environment: output_dir={config.output_dir}, "
        f"template={config.file_name_template}"
    )
    return config
