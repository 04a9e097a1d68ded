"""
Local mail sink.

Instead of delivering mail, writes each message as .txt/.html/.json files
under <output_dir>/<recipient-address>/ for inspection during development.

Usage:
    from localemail import create_mailer

    mailer = create_mailer(output_dir='./localemail')
    result = await mailer.send({
        'from': 'me@example.com',
        'to': ['you@example.com', {'name': 'Ann', 'address': 'ann@example.com'}],
        'subject': 'hello',
        'text': 'Hello World',
    })
"""

from localemail.config import MailerConfig, SuppressOptions, config_from_env, resolve_config
from localemail.domain.errors import IO_ERROR, INVALID_EMAIL, SIMULATE_ERROR, MailDeliveryError
from localemail.domain.models import Address, MailError, MailMessage, SendResult, SimulateOptions
from localemail.mailer import Mailer, create_mailer
from localemail.services.address import validate_email

__all__ = [
    'Address',
    'INVALID_EMAIL',
    'IO_ERROR',
    'MailDeliveryError',
    'MailError',
    'MailMessage',
    'Mailer',
    'MailerConfig',
    'SIMULATE_ERROR',
    'SendResult',
    'SimulateOptions',
    'SuppressOptions',
    'config_from_env',
    'create_mailer',
    'resolve_config',
    'validate_email',
]
