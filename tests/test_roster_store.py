# tests/test_roster_store.py
import pytest

from models import Student
from roster_store import RosterStore, counter_ids, generate_uuid


@pytest.fixture
def record():
    return {
        'name': 'John Doe',
        'email': 'john@school.edu',
        'phone': '9876543210',
        'parent_name': 'Jane Doe',
        'parent_phone': '9123456789',
    }


@pytest.fixture
def store():
    return RosterStore(id_generator=counter_ids())


def test_add_assigns_id_and_returns_student(store, record):
    student = store.add(record)

    assert isinstance(student, Student)
    assert student.id == 'student-1'
    assert student.name == 'John Doe'
    assert student.course is None


def test_add_prepends(store, record):
    first = store.add(record)
    second = store.add({**record, 'name': 'Second Student'})

    assert store.list() == (second, first)
    assert store.count() == 2


def test_count_increments_by_one(store, record):
    before = store.count()
    store.add(record)
    assert store.count() == before + 1


def test_delete_present_id_removes_only_that_record(store, record):
    a = store.add({**record, 'name': 'Alpha'})
    b = store.add({**record, 'name': 'Bravo'})
    c = store.add({**record, 'name': 'Charlie'})

    assert store.delete(b.id) is True
    assert store.list() == (c, a)
    assert store.count() == 2


def test_delete_missing_id_is_a_no_op(store, record):
    store.add(record)
    before = store.list()

    assert store.delete('no-such-id') is False
    assert store.list() == before
    assert store.count() == 1


def test_delete_twice_same_as_once(store, record):
    keep = store.add(record)
    gone = store.add(record)

    assert store.delete(gone.id) is True
    assert store.delete(gone.id) is False
    assert store.list() == (keep,)


def test_list_is_a_snapshot(store, record):
    store.add(record)
    snapshot = store.list()

    store.add(record)

    assert len(snapshot) == 1
    assert store.count() == 2
    with pytest.raises(AttributeError):
        snapshot.append(None)


def test_ids_are_never_reused(record):
    ids = iter(['a', 'a', 'b'])
    store = RosterStore(id_generator=lambda: next(ids))

    first = store.add(record)
    store.delete(first.id)
    second = store.add(record)

    assert first.id == 'a'
    assert second.id == 'b'


def test_stuck_id_generator_raises(record):
    store = RosterStore(id_generator=lambda: 'same')
    store.add(record)

    with pytest.raises(RuntimeError):
        store.add(record)


def test_default_ids_are_uuids(record):
    store = RosterStore()
    ids = {store.add(record).id for _ in range(5)}

    assert len(ids) == 5
    assert all(len(i) == 36 for i in ids)
    assert len(generate_uuid()) == 36


def test_students_are_immutable(store, record):
    student = store.add(record)

    with pytest.raises(AttributeError):
        student.name = 'Changed'


def test_get_and_clear(store, record):
    student = store.add(record)

    assert store.get(student.id) == student
    assert store.get('missing') is None

    store.clear()
    assert store.count() == 0
    assert len(store) == 0
