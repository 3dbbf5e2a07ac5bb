"""
Field rule sets for the student form.

Each rule set maps a form field name to its FieldRules, in the order the
fields appear on the form. The three variants share fields and messages and
differ only in which fields are collected and how strict they are.
"""
import re
from functools import partial
from typing import Dict

from validation import (
    AgeRange, Choice, FieldRules, MaxLength, MinLength, Pattern,
    sanitize_phone, sanitize_student_id,
)

GENDERS = ('Male', 'Female', 'Other')

COURSES = (
    'Computer Science',
    'Electrical Engineering',
    'Mechanical Engineering',
    'Civil Engineering',
    'Mathematics',
    'Physics',
    'Chemistry',
    'Biology',
    'Business Administration',
    'Economics',
)

NAME_PATTERN = r"[a-zA-Z\s'-]+"
PHONE_PATTERN = r'[0-9]{10}'
INTERNATIONAL_PHONE_PATTERN = r'\+?[0-9]{2,15}'
STUDENT_ID_PATTERN = r'[A-Z0-9]{4,12}'
EMAIL_PATTERN = r"(?!\.)(?!.*\.\.)[A-Z0-9_'+\-.]*[A-Z0-9_+-]@(?:[A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}"

MIN_AGE = 16
MAX_AGE = 30


def _name_field(label: str, strict: bool) -> FieldRules:
    rules = [
        MinLength(2, f"{label} must be at least 2 characters"),
        MaxLength(100, "Name must be under 100 characters"),
    ]
    if strict:
        rules.append(Pattern(NAME_PATTERN, "Name can only contain letters, spaces, hyphens, and apostrophes"))
    return FieldRules(label, rules)


def _email_field() -> FieldRules:
    return FieldRules('Email ID', [
        Pattern(EMAIL_PATTERN, "Please enter a valid email address (e.g. john@school.edu)", re.IGNORECASE | re.ASCII),
        MaxLength(255, "Email must be under 255 characters"),
    ], lowercase=True)


def _phone_field(label: str, strict: bool) -> FieldRules:
    if strict:
        return FieldRules(label, [
            Pattern(PHONE_PATTERN, "Phone must be exactly 10 digits (e.g. 9876543210)"),
        ], input_filter=sanitize_phone)
    return FieldRules(label, [
        Pattern(INTERNATIONAL_PHONE_PATTERN, "Phone must be 2-15 digits with an optional leading + (e.g. +919876543210)"),
    ], input_filter=partial(sanitize_phone, allow_plus=True))


def strict_rules() -> Dict[str, FieldRules]:
    """Five contact fields, 10-digit phones, letters-only names."""
    return {
        'name': _name_field('Name', strict=True),
        'email': _email_field(),
        'phone': _phone_field('Student Phone', strict=True),
        'parent_name': _name_field('Parent name', strict=True),
        'parent_phone': _phone_field('Parent Phone', strict=True),
    }


def lenient_rules() -> Dict[str, FieldRules]:
    """Five contact fields, international phones, any characters in names."""
    return {
        'name': _name_field('Name', strict=False),
        'email': _email_field(),
        'phone': _phone_field('Student Phone', strict=False),
        'parent_name': _name_field('Parent name', strict=False),
        'parent_phone': _phone_field('Parent Phone', strict=False),
    }


def extended_rules() -> Dict[str, FieldRules]:
    """The full enrollment form: strict contact fields plus academic details."""
    return {
        'student_id': FieldRules('Student ID', [
            Pattern(STUDENT_ID_PATTERN, "Student ID must be 4-12 uppercase letters/digits (e.g. CS2024001)"),
        ], input_filter=sanitize_student_id),
        'name': _name_field('Name', strict=True),
        'email': _email_field(),
        'phone': _phone_field('Student Phone', strict=True),
        'date_of_birth': FieldRules('Date of Birth', [
            AgeRange(MIN_AGE, MAX_AGE, f"Student must be between {MIN_AGE} and {MAX_AGE} years old"),
        ]),
        'gender': FieldRules('Gender', [
            Choice(GENDERS, "Please select a gender", f"Gender must be one of: {', '.join(GENDERS)}"),
        ], choices=GENDERS),
        'course': FieldRules('Course / Department', [
            Choice(COURSES, "Please select a course", "Please choose a course from the list"),
        ], choices=COURSES),
        'parent_name': _name_field('Parent name', strict=True),
        'parent_phone': _phone_field('Parent Phone', strict=True),
        'address': FieldRules('Address', [
            MinLength(10, "Address must be at least 10 characters"),
            MaxLength(300, "Address must be under 300 characters"),
        ]),
    }


RULE_SETS = {
    'strict': strict_rules,
    'lenient': lenient_rules,
    'extended': extended_rules,
}


def get_rule_set(name: str) -> Dict[str, FieldRules]:
    try:
        return RULE_SETS[name.strip().lower()]()
    except KeyError:
        raise ValueError(f"Unknown rule set '{name}'. Available: {', '.join(RULE_SETS)}")
