import uuid
import logging
import itertools
from typing import Callable, Dict, List, Optional, Tuple

from models import Student


def generate_uuid() -> str:
    """Generate a UUID string for student ids"""
    return str(uuid.uuid4())


def counter_ids(prefix: str = 'student-', start: int = 1) -> Callable[[], str]:
    """Deterministic id generator: student-1, student-2, ..."""
    counter = itertools.count(start)
    return lambda: f"{prefix}{next(counter)}"


class RosterStore:
    """
    In-memory, newest-first list of students.

    The store trusts its callers: records are expected to be validated
    already and are never checked again here.
    """

    MAX_ID_ATTEMPTS = 10

    def __init__(self, id_generator: Optional[Callable[[], str]] = None):
        self.logger = logging.getLogger(__name__)
        self._id_generator = id_generator or generate_uuid
        self._students: List[Student] = []
        # Every id ever handed out, so a deleted id is never reused
        self._issued_ids = set()

    def _next_id(self) -> str:
        for _ in range(self.MAX_ID_ATTEMPTS):
            student_id = self._id_generator()
            if student_id not in self._issued_ids:
                self._issued_ids.add(student_id)
                return student_id
        raise RuntimeError(f"Id generator produced {self.MAX_ID_ATTEMPTS} duplicate ids in a row")

    def add(self, record: Dict[str, str]) -> Student:
        student = Student.from_record(self._next_id(), record)
        self._students.insert(0, student)
        self.logger.info(f"Added student {student.id} ({student.name})")
        return student

    def delete(self, student_id: str) -> bool:
        original_count = len(self._students)
        self._students = [s for s in self._students if s.id != student_id]

        removed = len(self._students) != original_count
        if removed:
            self.logger.info(f"Deleted student {student_id}")
        else:
            self.logger.debug(f"Delete ignored, no student with id {student_id}")
        return removed

    def get(self, student_id: str) -> Optional[Student]:
        return next((s for s in self._students if s.id == student_id), None)

    def list(self) -> Tuple[Student, ...]:
        return tuple(self._students)

    def count(self) -> int:
        return len(self._students)

    def clear(self):
        self._students = []

    def __len__(self):
        return self.count()
