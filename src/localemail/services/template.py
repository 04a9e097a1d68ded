"""
Filename template expansion.

Tokens (case-sensitive), each optionally followed by {N} to keep only the
first N characters of the substituted value:

    %ts  seconds since epoch            1630000000
    %dt  UTC date and time              2021-08-27T11-45-32
    %fn  sender display name            John Doe
    %fa  sender address                 john.doe@mail.com
    %d   UTC date                       2021-08-27
    %t   UTC time                       11-45-32
    %s   subject or "no-subject"        hello

Examples:
    '%ts_%s'      => 1630000000_hello
    '%d_%t_%s'    => 2021-08-27_11-45-32_hello
    '[%d %t] %s'  => [2021-08-27 11-45-32] hello
    '%s{3}'       => hel

A {0} suffix is treated as "no truncation". Unknown placeholders are left
as-is. Substituted values are never re-scanned for tokens.
"""

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone

from localemail.domain.models import MailMessage

DEFAULT_SUBJECT = 'no-subject'

# Longer tokens first so %ts/%dt are never read as %t/%d plus a literal
_TOKEN_PATTERN = re.compile(r'%(ts|dt|fn|fa|d|t|s)(\{(\d+)\})?')


@dataclass(frozen=True)
class TemplateContext:
    """
    Values available to a single expansion.

    Attributes:
        now: Clock reading shared by %ts, %dt, %d and %t
        subject: Message subject (None falls back to "no-subject")
        from_name: Sender display name
        from_address: Sender address
    """
    now: datetime
    subject: str
    from_name: str
    from_address: str

    @classmethod
    def for_message(cls, message: MailMessage, now: datetime) -> 'TemplateContext':
        sender = message.sender_address()
        return cls(
            now=now,
            subject=message.subject or DEFAULT_SUBJECT,
            from_name=sender.name,
            from_address=sender.address,
        )

    @property
    def utc_now(self) -> datetime:
        if self.now.tzinfo is None:
            return self.now.replace(tzinfo=timezone.utc)
        return self.now.astimezone(timezone.utc)


def _token_value(token: str, context: TemplateContext) -> str:
    now = context.utc_now
    if token == 'ts':
        return str(math.floor(now.timestamp() + 0.5))
    if token == 'dt':
        return now.strftime('%Y-%m-%dT%H-%M-%S')
    if token == 'fn':
        return context.from_name
    if token == 'fa':
        return context.from_address
    if token == 'd':
        return now.strftime('%Y-%m-%d')
    if token == 't':
        return now.strftime('%H-%M-%S')
    return context.subject or DEFAULT_SUBJECT


def truncate(value: str, length: int) -> str:
    """Keep the first length characters; 0 means keep everything."""
    if not length:
        return value
    return value[:length]


def expand_file_name(template: str, context: TemplateContext) -> str:
    """
    Substitute every token in template.

    Args:
        template: Filename pattern, e.g. '%ts_%s'
        context: Clock reading, subject and sender fields

    Returns:
        str: Expanded filename (no extension)

    Example:
        >>> now = datetime(2021, 8, 27, 11, 45, 32, tzinfo=timezone.utc)
        >>> ctx = TemplateContext(now=now, subject="hello", from_name="", from_address="a@b.io")
        >>> expand_file_name("%d_%s{3}", ctx)
        "2021-08-27_hel"
    """
    def _replace(match: 're.Match[str]') -> str:
        value = _token_value(match.group(1), context)
        if match.group(3) is None:
            return value
        return truncate(value, int(match.group(3)))

    return _TOKEN_PATTERN.sub(_replace, template)
