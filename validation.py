import re
import logging
from datetime import date, datetime
from typing import Callable, Dict, List, Mapping, Optional, Sequence


class ValidationResult:
    """
    Outcome of validating one submission.

    Either ``record`` holds the normalized field values and ``errors`` is
    empty, or ``record`` is None and ``errors`` maps every failing field to
    a message.
    """

    def __init__(self, record: Optional[Dict[str, str]] = None,
                 errors: Optional[Dict[str, str]] = None):
        self.record = record
        self.errors = errors or {}

    @property
    def is_valid(self) -> bool:
        return self.record is not None and not self.errors

    def __bool__(self):
        return self.is_valid

    def __repr__(self):
        if self.is_valid:
            return f"<ValidationResult valid fields={list(self.record)}>"
        return f"<ValidationResult invalid errors={self.errors}>"


class Rule:
    """A single check on a trimmed field value. Returns an error message or None."""

    def check(self, value: str, today: date) -> Optional[str]:
        raise NotImplementedError


class MinLength(Rule):
    def __init__(self, length: int, message: str):
        self.length = length
        self.message = message

    def check(self, value, today):
        if len(value) < self.length:
            return self.message
        return None


class MaxLength(Rule):
    def __init__(self, length: int, message: str):
        self.length = length
        self.message = message

    def check(self, value, today):
        if len(value) > self.length:
            return self.message
        return None


class Pattern(Rule):
    def __init__(self, pattern: str, message: str, flags: int = 0):
        self.regex = re.compile(pattern, flags)
        self.message = message

    def check(self, value, today):
        if not self.regex.fullmatch(value):
            return self.message
        return None


class Choice(Rule):
    """
    Value must be one of a fixed, ordered set of options.
    An empty value means nothing was selected and gets its own message.
    """

    def __init__(self, options: Sequence[str], missing_message: str,
                 invalid_message: Optional[str] = None):
        self.options = tuple(options)
        self.missing_message = missing_message
        self.invalid_message = invalid_message or f"Must be one of: {', '.join(self.options)}"

    def check(self, value, today):
        if not value:
            return self.missing_message
        if value not in self.options:
            return self.invalid_message
        return None


class AgeRange(Rule):
    """
    Age derived from an ISO date of birth must fall within [minimum, maximum].

    Age is the difference between the current year and the birth year; the
    month and day are not considered.
    """

    DATE_FORMAT = '%Y-%m-%d'

    def __init__(self, minimum: int, maximum: int, message: str,
                 missing_message: str = 'Date of birth is required',
                 invalid_message: str = 'Please enter a valid date of birth (YYYY-MM-DD)'):
        self.minimum = minimum
        self.maximum = maximum
        self.message = message
        self.missing_message = missing_message
        self.invalid_message = invalid_message

    def check(self, value, today):
        if not value:
            return self.missing_message
        try:
            born = datetime.strptime(value, self.DATE_FORMAT).date()
        except ValueError:
            return self.invalid_message
        age = today.year - born.year
        if age < self.minimum or age > self.maximum:
            return self.message
        return None


class FieldRules:
    """Declarative rules for one input field."""

    def __init__(self, label: str, rules: List[Rule], lowercase: bool = False,
                 input_filter: Optional[Callable[[str], str]] = None,
                 choices: Optional[Sequence[str]] = None):
        self.label = label
        self.rules = rules
        self.lowercase = lowercase
        self.input_filter = input_filter
        self.choices = tuple(choices) if choices else None

    def normalize(self, value: str) -> str:
        value = value.strip()
        if self.lowercase:
            value = value.lower()
        return value

    def first_error(self, value: str, today: date) -> Optional[str]:
        for rule in self.rules:
            message = rule.check(value, today)
            if message:
                return message
        return None


def sanitize_phone(value: str, allow_plus: bool = False) -> str:
    """Strip everything but digits; optionally keep a single leading '+'."""
    value = value or ''
    digits = re.sub(r'[^0-9]', '', value)
    if allow_plus and value.strip().startswith('+'):
        return '+' + digits
    return digits


def sanitize_student_id(value: str) -> str:
    """Upper-case and drop anything that is not a letter or digit."""
    return re.sub(r'[^A-Z0-9]', '', (value or '').upper())


def _text(value) -> str:
    if value is None:
        return ''
    return str(value)


class ValidationEngine:
    def __init__(self, rule_set: Mapping[str, FieldRules],
                 today: Callable[[], date] = date.today):
        self.rule_set = rule_set
        self.today = today
        self.logger = logging.getLogger(__name__)

    @property
    def fields(self) -> List[str]:
        return list(self.rule_set)

    def apply_input_filters(self, raw: Mapping[str, str]) -> Dict[str, str]:
        """
        Run each field's input filter over the raw text.
        Fields outside the rule set are dropped.
        """
        filtered = {}
        for field, spec in self.rule_set.items():
            value = _text(raw.get(field))
            if spec.input_filter:
                value = spec.input_filter(value)
            filtered[field] = value
        return filtered

    def validate(self, raw: Mapping[str, str]) -> ValidationResult:
        """
        Validate every field of the rule set against ``raw``.

        All failing fields are reported together; a record is produced
        only if every field passes.
        """
        today = self.today()
        record = {}
        errors = {}

        for field, spec in self.rule_set.items():
            value = spec.normalize(_text(raw.get(field)))
            message = spec.first_error(value, today)
            if message:
                errors[field] = message
            else:
                record[field] = value

        if errors:
            self.logger.debug(f"Rejected submission, failing fields: {sorted(errors)}")
            return ValidationResult(errors=errors)

        return ValidationResult(record=record)
