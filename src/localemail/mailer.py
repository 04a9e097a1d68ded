"""
Send pipeline - core orchestration.

A send goes through these steps:
1. Wait the simulated delay (1 ms by default)
2. Fail with the simulated error, if one was requested
3. Validate the sender, then every recipient in order
4. Ensure the output root and one folder per recipient
5. Expand the filename template and write artifacts for each recipient

All failures are returned as SendResult with success=False.
No exceptions propagate out of send() for invalid input or I/O errors.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Union

from localemail.config import MailerConfig, resolve_config
from localemail.domain.errors import INVALID_EMAIL, IO_ERROR
from localemail.domain.models import MailError, MailMessage, SendResult
from localemail.services import address as address_service
from localemail.services import simulation
from localemail.services import storage
from localemail.services import template as template_service

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Mailer:
    """
    Writes outgoing mail to disk instead of delivering it.

    Holds an immutable MailerConfig; send() calls are independent of each
    other and share nothing but the filesystem.
    """

    def __init__(self, config: Optional[MailerConfig] = None, clock: Optional[Clock] = None):
        """
        Initialize mailer.

        Args:
            config: Resolved configuration (defaults when None)
            clock: Returns the current time; sampled once per recipient
        """
        self.config = config or MailerConfig()
        self._clock = clock or _utc_now

    async def send(self, message: Union[MailMessage, Mapping[str, Any]]) -> SendResult:
        """
        Persist a message as artifact files, one folder per recipient.

        Args:
            message: MailMessage or mapping with "from", "to", ... keys

        Returns:
            SendResult with success=True once every recipient is written,
            or success=False with INVALID_EMAIL, SIMULATE_ERROR (or the
            caller-supplied code) or IO_ERROR
        """
        if not isinstance(message, MailMessage):
            try:
                message = MailMessage.from_dict(message)
            except KeyError as e:
                logger.warning(f"Rejected send: missing field {e}")
                return SendResult.failed(MailError(message=f"Missing required field: {e}", code=INVALID_EMAIL))

        await simulation.wait(message.simulate)

        error = simulation.simulated_error(message.simulate)
        if error is not None:
            return SendResult.failed(error)

        error = self._validate(message)
        if error is not None:
            logger.warning(f"Rejected send: {error.message}")
            return SendResult.failed(error)

        try:
            self._write(message)
        except OSError as e:
            logger.error(f"Failed to write mail to {self.config.output_dir}: {e}", exc_info=True)
            return SendResult.failed(MailError(message=str(e), code=IO_ERROR))

        return SendResult.ok()

    def send_sync(self, message: Union[MailMessage, Mapping[str, Any]]) -> SendResult:
        """Run send() to completion. Not usable inside a running event loop."""
        return asyncio.run(self.send(message))

    def _validate(self, message: MailMessage) -> Optional[MailError]:
        """
        Validate the sender first, then recipients in order.

        Returns:
            MailError for the first invalid address, None when all are valid
        """
        try:
            sender = message.sender_address()
            recipients = message.recipients()
        except TypeError as e:
            return MailError(message=str(e), code=INVALID_EMAIL)

        if not recipients:
            return MailError(message="At least one recipient is required", code=INVALID_EMAIL)

        candidates = [sender.address] + [r.address for r in recipients]
        invalid = address_service.find_invalid_address(candidates)
        if invalid is not None:
            return MailError(message=f"Invalid email address: {invalid}", code=INVALID_EMAIL)

        return None

    def _write(self, message: MailMessage) -> None:
        """
        Provision folders and write artifacts for every recipient.

        Raises:
            OSError: If any directory or file cannot be created
        """
        output_root = storage.ensure_output_root(self.config.output_dir)
        recipients = storage.provision_recipient_folders(output_root, message.recipients())

        logger.info(
            f"Writing mail '{message.subject or template_service.DEFAULT_SUBJECT}' "
            f"for {len(recipients)} recipient(s) under {output_root}"
        )

        for recipient in recipients:
            context = template_service.TemplateContext.for_message(message, self._clock())
            file_name = template_service.expand_file_name(self.config.file_name_template, context)

            storage.write_artifacts(
                storage.recipient_folder(output_root, recipient),
                file_name,
                message,
                recipient,
                self.config.suppress,
            )


def create_mailer(
    output_dir: Optional[str] = None,
    file_name_template: Optional[str] = None,
    ignore_create_files: Optional[Mapping[str, Any]] = None,
    clock: Optional[Clock] = None
) -> Mailer:
    """
    Build a Mailer from configuration overrides.

    Args:
        output_dir: Output root (default ./localemail)
        file_name_template: Filename template (default %ts_%s)
        ignore_create_files: Partial {"text", "html", "json"} suppression flags
            (default: write .txt and .html, skip .json)
        clock: Optional time source, mainly for tests

    Example:
        >>> mailer = create_mailer(output_dir='/tmp/mail', ignore_create_files={'json': False})
        >>> mailer.send_sync({'from': 'me@example.com', 'to': 'you@example.com', 'text': 'hi'})
        SendResult(success=True)
    """
    config = resolve_config(
        output_dir=output_dir,
        file_name_template=file_name_template,
        ignore_create_files=ignore_create_files,
    )
    return Mailer(config, clock=clock)
