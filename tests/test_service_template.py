"""
Tests for filename template expansion.
"""

import re
import pytest
import sys
import os
from datetime import datetime, timezone, timedelta

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from localemail.domain.models import Address, MailMessage
from localemail.services import template

NOW = datetime(2021, 8, 27, 11, 45, 32, 250000, tzinfo=timezone.utc)
NOW_TS = '1630064732'


def make_context(subject='hello', from_name='John Doe', from_address='john.doe@mail.com', now=NOW):
    return template.TemplateContext(
        now=now,
        subject=subject,
        from_name=from_name,
        from_address=from_address,
    )


class TestExpandFileName:
    """Test each token and their combinations."""

    def test_default_template(self):
        """Test '%ts_%s' expands to timestamp and subject."""
        result = template.expand_file_name('%ts_%s', make_context())

        assert result == f'{NOW_TS}_hello'
        assert re.match(r'^\d+_hello$', result)

    def test_timestamp_rounds_to_nearest_second(self):
        """Test %ts rounds rather than truncates fractional seconds."""
        ctx = make_context(now=NOW + timedelta(milliseconds=600))

        assert template.expand_file_name('%ts', ctx) == '1630064733'

    def test_date_time_token(self):
        """Test %dt is ISO date and time with dashes, no fraction."""
        result = template.expand_file_name('%dt_%s', make_context())

        assert result == '2021-08-27T11-45-32_hello'
        assert re.match(r'^\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}_hello$', result)

    def test_date_and_time_tokens(self):
        """Test %d and %t separately."""
        assert template.expand_file_name('%d_%t_%s', make_context()) == '2021-08-27_11-45-32_hello'
        assert template.expand_file_name('[%d %t] %s', make_context()) == '[2021-08-27 11-45-32] hello'

    def test_dt_is_not_read_as_d_plus_literal(self):
        """Test %dt is not expanded as %d followed by 't'."""
        result = template.expand_file_name('%dt', make_context())

        assert result == '2021-08-27T11-45-32'
        assert not result.endswith('t')

    def test_sender_tokens(self):
        """Test %fn and %fa."""
        result = template.expand_file_name('%fn_%fa_%s', make_context())

        assert result == 'John Doe_john.doe@mail.com_hello'

    def test_empty_sender_name(self):
        """Test %fn expands to an empty string for bare-address senders."""
        result = template.expand_file_name('[%fn]', make_context(from_name=''))

        assert result == '[]'

    def test_missing_subject_falls_back(self):
        """Test %s uses 'no-subject' when the subject is empty."""
        assert template.expand_file_name('%s', make_context(subject='')) == 'no-subject'

    def test_non_utc_clock_is_converted(self):
        """Test date tokens are always rendered in UTC."""
        local = NOW.astimezone(timezone(timedelta(hours=5)))

        assert template.expand_file_name('%dt', make_context(now=local)) == '2021-08-27T11-45-32'

    def test_naive_clock_treated_as_utc(self):
        """Test a naive datetime is assumed to be UTC."""
        naive = NOW.replace(tzinfo=None)

        assert template.expand_file_name('%ts', make_context(now=naive)) == NOW_TS

    def test_unknown_placeholders_pass_through(self):
        """Test unrecognized tokens are left as-is."""
        assert template.expand_file_name('%x_%S_%%', make_context()) == '%x_%S_%%'

    def test_substituted_values_not_rescanned(self):
        """Test a value containing a token is not expanded again."""
        result = template.expand_file_name('%fn', make_context(from_name='100%s'))

        assert result == '100%s'

    def test_template_without_tokens(self):
        """Test a literal template is returned unchanged."""
        assert template.expand_file_name('mail', make_context()) == 'mail'


class TestTruncation:
    """Test {N} truncation suffixes."""

    def test_truncate_subject(self):
        """Test '%s{3}' keeps the first three characters."""
        assert template.expand_file_name('%s{3}', make_context()) == 'hel'

    def test_truncate_timestamp(self):
        """Test truncation applies to %ts too."""
        assert template.expand_file_name('%ts{4}', make_context()) == '1630'

    def test_truncate_longer_than_value(self):
        """Test N beyond the value length keeps the whole value."""
        assert template.expand_file_name('%s{50}', make_context()) == 'hello'

    def test_zero_means_no_truncation(self):
        """Test '{0}' keeps the full value."""
        assert template.expand_file_name('%s{0}', make_context()) == 'hello'

    def test_non_numeric_braces_left_literal(self):
        """Test a non-integer brace suffix is not consumed."""
        assert template.expand_file_name('%s{x}', make_context()) == 'hello{x}'

    def test_mixed_truncations(self):
        """Test several truncated tokens in one template."""
        result = template.expand_file_name('%d{4}-%fn{4}-%s{2}', make_context())

        assert result == '2021-John-he'

    @pytest.mark.parametrize('length,expected', [(0, 'hello'), (1, 'h'), (5, 'hello')])
    def test_truncate_helper(self, length, expected):
        """Test the truncate helper directly."""
        assert template.truncate('hello', length) == expected


class TestTemplateContext:
    """Test building a context from a message."""

    def test_for_message_with_structured_sender(self):
        """Test sender name/address come from an Address."""
        message = MailMessage(
            sender=Address(address='john@example.com', name='John'),
            to='ann@example.com',
            subject='Hi',
        )

        ctx = template.TemplateContext.for_message(message, NOW)

        assert ctx.from_name == 'John'
        assert ctx.from_address == 'john@example.com'
        assert ctx.subject == 'Hi'
        assert ctx.now == NOW

    def test_for_message_with_bare_sender_and_no_subject(self):
        """Test defaults for bare sender and missing subject."""
        message = MailMessage(sender='john@example.com', to='ann@example.com')

        ctx = template.TemplateContext.for_message(message, NOW)

        assert ctx.from_name == ''
        assert ctx.from_address == 'john@example.com'
        assert ctx.subject == 'no-subject'
