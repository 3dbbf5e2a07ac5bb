#!/usr/bin/env python3
"""
Generate sample student submissions for trying out the directory.

Run directly to write an Excel file that can be uploaded on the main page.
"""
import re
import random
from datetime import date
from typing import Dict, List, Optional

import pandas as pd
from faker import Faker

from field_rules import COURSES, GENDERS, get_rule_set

COURSE_CODES = {
    'Computer Science': 'CS',
    'Electrical Engineering': 'EE',
    'Mechanical Engineering': 'ME',
    'Civil Engineering': 'CE',
    'Mathematics': 'MA',
    'Physics': 'PH',
    'Chemistry': 'CH',
    'Biology': 'BI',
    'Business Administration': 'BA',
    'Economics': 'EC',
}


def _clean_name(name: str) -> str:
    return re.sub(r"[^a-zA-Z\s'-]", '', name).strip()


def _slug(name: str) -> str:
    return re.sub(r'[^a-z0-9]', '', name.lower())


def create_sample_submissions(count: int = 10, rule_set_name: str = 'extended',
                              today: Optional[date] = None,
                              seed: Optional[int] = None) -> List[Dict[str, str]]:
    """Create raw form submissions that pass the given rule set."""
    fake = Faker('en_IN')  # Indian locale, matches the 10-digit phone format
    rng = random.Random(seed)
    if seed is not None:
        fake.seed_instance(seed)
    today = today or date.today()
    fields = get_rule_set(rule_set_name)

    submissions = []
    for i in range(count):
        gender = rng.choice(GENDERS)
        if gender == 'Male':
            first_name = fake.first_name_male()
        elif gender == 'Female':
            first_name = fake.first_name_female()
        else:
            first_name = fake.first_name()
        last_name = fake.last_name()
        course = rng.choice(COURSES)
        age = rng.randint(17, 29)

        student = {
            'student_id': f"{COURSE_CODES[course]}{today.year}{i + 1:03d}",
            'name': _clean_name(f"{first_name} {last_name}"),
            'email': f"{_slug(first_name) or 'student'}.{_slug(last_name) or 'user'}{i + 1}@school.edu",
            'phone': fake.numerify('9#########'),
            'date_of_birth': date(today.year - age, rng.randint(1, 12), rng.randint(1, 28)).isoformat(),
            'gender': gender,
            'course': course,
            'parent_name': _clean_name(f"{fake.first_name()} {last_name}"),
            'parent_phone': fake.numerify('8#########'),
            'address': fake.address().replace('\n', ', ')[:300],
        }
        submissions.append({field: student[field] for field in fields})

    return submissions


def create_sample_student_data(output_file: str = 'sample_students.xlsx', count: int = 30):
    """Write sample submissions to an Excel file."""
    df = pd.DataFrame(create_sample_submissions(count))
    df.to_excel(output_file, index=False, engine='openpyxl')

    print(f"Sample student data created in '{output_file}'")
    print(f"Total students: {len(df)}")
    print(f"Courses: {df['course'].value_counts().to_dict()}")
    print(f"Gender distribution: {df['gender'].value_counts().to_dict()}")

    return output_file


if __name__ == "__main__":
    create_sample_student_data()
