"""
Data models for the mail sink domain.

These type-safe data structures define clear contracts between components.
Union-typed inputs (bare strings, Address objects, lists of either) are
normalized to Address at the boundary via Address.coerce().
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .errors import MailDeliveryError


@dataclass(frozen=True)
class Address:
    """
    Mail participant.

    Attributes:
        address: Email address (used for folder placement)
        name: Display name (cosmetic, empty when given as a bare string)
    """
    address: str
    name: str = ''

    @classmethod
    def coerce(cls, value: Union[str, 'Address', Mapping[str, Any]]) -> 'Address':
        """
        Normalize a bare string, mapping or Address into an Address.

        Raises:
            TypeError: If value is none of the accepted forms
        """
        if isinstance(value, Address):
            return value
        if isinstance(value, str):
            return cls(address=value)
        if isinstance(value, Mapping):
            return cls(address=value.get('address', ''), name=value.get('name') or '')
        raise TypeError(f"Cannot interpret {type(value).__name__} as an email address")

    def to_dict(self) -> Dict[str, str]:
        return {'name': self.name, 'address': self.address}


@dataclass(frozen=True)
class MailError:
    """
    Tagged failure value, returned as data rather than raised.

    Attributes:
        message: Human-readable description
        code: Machine-readable code (INVALID_EMAIL, SIMULATE_ERROR, IO_ERROR or caller-supplied)
    """
    message: str
    code: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'MailError':
        return cls(message=str(data.get('message', '')), code=str(data.get('code', '')))

    def to_dict(self) -> Dict[str, str]:
        return {'message': self.message, 'code': self.code}


_DELAY_KEYS = ('delay_ms', 'delayMs', 'delay')


@dataclass(frozen=True)
class SimulateOptions:
    """
    Simulated failure injection.

    Attributes:
        delay_ms: Delay before the send proceeds or fails (default 1 ms)
        error: Error to fail with; a bare string gets code SIMULATE_ERROR
        delay_key: Key the delay was given under, reused when serializing
    """
    delay_ms: Optional[int] = None
    error: Union[str, MailError, None] = None
    delay_key: str = field(default='delay_ms', compare=False, repr=False)

    @property
    def effective_delay_ms(self) -> int:
        """Delay actually honored; 0 and unset both fall back to 1 ms."""
        return self.delay_ms or 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SimulateOptions':
        delay_key = next((k for k in _DELAY_KEYS if k in data), 'delay_ms')
        error = data.get('error')
        if isinstance(error, Mapping):
            error = MailError.from_dict(error)
        return cls(delay_ms=data.get(delay_key), error=error, delay_key=delay_key)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.delay_ms is not None:
            result[self.delay_key] = self.delay_ms
        if isinstance(self.error, MailError):
            result['error'] = self.error.to_dict()
        elif self.error is not None:
            result['error'] = self.error
        return result


AddressInput = Union[str, Address, Mapping[str, Any]]


@dataclass(frozen=True)
class MailMessage:
    """
    Outgoing message handed to Mailer.send().

    Attributes:
        sender: The "from" participant (bare address or Address)
        to: One recipient or a non-empty list of recipients
        subject: Subject line (filename token %s falls back to "no-subject")
        text: Plain text body, written to <file>.txt
        html: HTML body, written to <file>.html
        simulate: Optional delay/error injection
    """
    sender: AddressInput
    to: Union[AddressInput, Sequence[AddressInput]]
    subject: Optional[str] = None
    text: Optional[str] = None
    html: Optional[str] = None
    simulate: Optional[SimulateOptions] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'MailMessage':
        """
        Build a message from a mapping using the wire key names.

        Accepts "from" (or "sender"), "to", "subject", "text", "html" and
        "simulate" (or "simulateOptions").
        """
        simulate = data.get('simulate', data.get('simulateOptions'))
        if isinstance(simulate, Mapping):
            simulate = SimulateOptions.from_dict(simulate)
        return cls(
            sender=data['sender'] if 'sender' in data and 'from' not in data else data['from'],
            to=data['to'],
            subject=data.get('subject'),
            text=data.get('text'),
            html=data.get('html'),
            simulate=simulate,
        )

    def sender_address(self) -> Address:
        return Address.coerce(self.sender)

    def recipients(self) -> List[Address]:
        """Normalized recipients in input order (duplicates kept)."""
        if isinstance(self.to, (list, tuple)):
            return [Address.coerce(t) for t in self.to]
        return [Address.coerce(self.to)]

    def to_artifact(self, recipient: Address) -> Dict[str, Any]:
        """
        Per-recipient view of the message for the .json artifact.

        Only fields that were set are included; "from" is always structured
        and "to" holds the single recipient.
        """
        artifact: Dict[str, Any] = {
            'from': self.sender_address().to_dict(),
            'to': recipient.to_dict(),
        }
        for key in ('subject', 'text', 'html'):
            value = getattr(self, key)
            if value is not None:
                artifact[key] = value
        if self.simulate is not None:
            artifact['simulate'] = self.simulate.to_dict()
        return artifact


@dataclass(frozen=True)
class SendResult:
    """
    Outcome of a send.

    This explicit result type makes success/failure handling clear
    and prevents exceptions from being used for control flow.

    Attributes:
        success: Whether every artifact was written
        error: Failure details (None on success)
    """
    success: bool
    error: Optional[MailError] = None

    @classmethod
    def ok(cls) -> 'SendResult':
        return cls(success=True)

    @classmethod
    def failed(cls, error: MailError) -> 'SendResult':
        return cls(success=False, error=error)

    def raise_for_error(self) -> None:
        """
        Raise MailDeliveryError if this result is a failure.

        Raises:
            MailDeliveryError: Carrying the MailError of a failed send
        """
        if not self.success:
            raise MailDeliveryError(self.error)

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.success:
            return "SendResult(success=True)"
        else:
            return f"SendResult(success=False, code={self.error.code}, error={self.error.message})"
