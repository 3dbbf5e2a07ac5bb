import logging
from datetime import date
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from field_rules import get_rule_set
from models import Student
from roster_store import RosterStore
from validation import ValidationEngine

SUCCESS = 'success'
VALIDATION_FAILURE = 'validation-failure'


class Notification:
    """What the page should tell the user after a submit."""

    def __init__(self, kind: str, message: Optional[str] = None):
        self.kind = kind
        self.message = message

    @property
    def flash_category(self) -> str:
        return 'success' if self.kind == SUCCESS else 'error'

    def __repr__(self):
        return f"<Notification {self.kind}: {self.message}>"


class SubmitOutcome:
    def __init__(self, notification: Notification, student: Optional[Student] = None,
                 errors: Optional[Dict[str, str]] = None, values: Optional[Dict[str, str]] = None):
        self.notification = notification
        self.student = student
        self.errors = errors or {}
        # Sanitized input, echoed back into the form after a failed submit
        self.values = values or {}

    @property
    def ok(self) -> bool:
        return self.student is not None


class StudentDirectory:
    """
    Owns the roster for one app instance and is the only path that
    changes it: submit() to add a student, remove() to delete one.
    """

    ADDED_MESSAGE = 'Student added successfully!'
    REJECTED_MESSAGE = 'Please fix the highlighted fields'

    def __init__(self, rule_set_name: str = 'extended',
                 id_generator: Optional[Callable[[], str]] = None,
                 today: Callable[[], date] = date.today):
        self.logger = logging.getLogger(__name__)
        self.rule_set_name = rule_set_name
        self.rule_set = get_rule_set(rule_set_name)
        self.engine = ValidationEngine(self.rule_set, today=today)
        self.store = RosterStore(id_generator=id_generator)

    @property
    def fields(self) -> List[str]:
        return self.engine.fields

    def submit(self, raw: Mapping[str, str]) -> SubmitOutcome:
        values = self.engine.apply_input_filters(raw)
        result = self.engine.validate(values)

        if not result:
            self.logger.info(f"Submission rejected: {len(result.errors)} field(s) invalid")
            return SubmitOutcome(
                Notification(VALIDATION_FAILURE, self.REJECTED_MESSAGE),
                errors=result.errors,
                values=values,
            )

        student = self.store.add(result.record)
        return SubmitOutcome(Notification(SUCCESS, self.ADDED_MESSAGE), student=student, values=values)

    def submit_many(self, rows: Iterable[Mapping[str, str]]) -> Tuple[List[Student], List[Dict]]:
        """
        Submit each row on its own. Returns the added students and a
        list of {'row': n, 'errors': {...}} for rows that were rejected.
        Row numbers start at 1.
        """
        added = []
        failed = []
        for row_number, row in enumerate(rows, start=1):
            outcome = self.submit(row)
            if outcome.ok:
                added.append(outcome.student)
            else:
                failed.append({'row': row_number, 'errors': outcome.errors})
        return added, failed

    def remove(self, student_id: str) -> bool:
        return self.store.delete(student_id)

    def get(self, student_id: str) -> Optional[Student]:
        return self.store.get(student_id)

    def students(self) -> Tuple[Student, ...]:
        return self.store.list()

    def count(self) -> int:
        return self.store.count()

    def clear(self):
        self.store.clear()
        self.logger.info("Roster cleared")
