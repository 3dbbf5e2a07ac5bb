# Students live only in memory for the lifetime of the running app.
# Nothing here is written to a database; see roster_store.py.
from dataclasses import dataclass, asdict, fields
from typing import Dict, Optional


@dataclass(frozen=True)
class Student:
    id: str
    name: str
    email: str
    phone: str
    parent_name: str
    parent_phone: str

    # Only collected by the extended form
    student_id: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    course: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_record(cls, student_id: str, record: Dict[str, str]) -> 'Student':
        """Build a Student from a validated record, ignoring unknown keys."""
        known = {f.name for f in fields(cls)} - {'id'}
        values = {key: value for key, value in record.items() if key in known}
        return cls(id=student_id, **values)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)
