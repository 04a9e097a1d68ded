"""
Filesystem side of a send.

Layout produced:
    <output_dir>/<recipient-address>/<file-name>.txt
    <output_dir>/<recipient-address>/<file-name>.html
    <output_dir>/<recipient-address>/<file-name>.json

Directories are created recursively and existing files are overwritten.
OSError from the filesystem propagates to the caller.
"""

import json
import logging
from pathlib import Path
from typing import List

from localemail.config import SuppressOptions
from localemail.domain.models import Address, MailMessage

logger = logging.getLogger(__name__)


def ensure_output_root(output_dir: str) -> Path:
    """
    Create the output root if needed.

    Args:
        output_dir: Output root, relative paths resolve against the cwd

    Returns:
        Path: Absolute output root
    """
    root = Path(output_dir).resolve()
    root.mkdir(parents=True, exist_ok=True)
    return root


def recipient_folder(output_root: Path, recipient: Address) -> Path:
    return output_root / recipient.address


def provision_recipient_folders(output_root: Path, recipients: List[Address]) -> List[Address]:
    """
    Ensure one folder per recipient address exists under output_root.

    Args:
        output_root: Existing output root
        recipients: Normalized recipients

    Returns:
        List[Address]: The same recipients, same order, duplicates kept

    Raises:
        OSError: If a folder cannot be created
    """
    for recipient in recipients:
        folder = recipient_folder(output_root, recipient)
        if not folder.exists():
            logger.info(f"Creating recipient folder: {folder}")
        folder.mkdir(parents=True, exist_ok=True)
    return list(recipients)


def _write_text(path: Path, content: str) -> Path:
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
    return path


def write_artifacts(
    folder: Path,
    file_name: str,
    message: MailMessage,
    recipient: Address,
    suppress: SuppressOptions
) -> List[Path]:
    """
    Write the .txt, .html and .json artifacts for one recipient.

    Args:
        folder: Recipient folder (must exist)
        file_name: Expanded filename without extension
        message: Message being sent
        recipient: Recipient this copy is for
        suppress: Formats to skip

    Returns:
        List[Path]: Files written, in txt/html/json order

    Raises:
        OSError: If a file cannot be written

    Note:
        - .txt/.html are only written when the matching body is non-empty
        - .json is written regardless of bodies, unless suppressed
    """
    written = []

    if not suppress.text and message.text:
        written.append(_write_text(folder / f"{file_name}.txt", message.text))

    if not suppress.html and message.html:
        written.append(_write_text(folder / f"{file_name}.html", message.html))

    if not suppress.json:
        payload = json.dumps(message.to_artifact(recipient), indent=2, ensure_ascii=False)
        written.append(_write_text(folder / f"{file_name}.json", payload))

    logger.info(f"Wrote {len(written)} artifact(s) for {recipient.address}: {file_name}")
    return written
