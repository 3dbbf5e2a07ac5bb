# tests/test_excel_handler.py
import os
from datetime import datetime

import openpyxl
import pytest
import pandas as pd

from excel_handler import ExcelHandler

STRICT_FIELDS = ['name', 'email', 'phone', 'parent_name', 'parent_phone']


def test_read_maps_alternative_headings(tmp_path):
    filepath = tmp_path / 'students.xlsx'
    pd.DataFrame([
        {'Student Name': ' John Doe ', 'Email ID': 'JOHN@School.EDU', 'Mobile': '9876543210',
         'Guardian Name': 'Jane Doe', 'Parent Phone': '9123456789'},
        {'Student Name': None, 'Email ID': None, 'Mobile': None,
         'Guardian Name': None, 'Parent Phone': None},
    ]).to_excel(filepath, index=False, engine='openpyxl')

    rows = ExcelHandler().read_student_data(str(filepath), STRICT_FIELDS)

    assert rows == [{
        'name': 'John Doe',
        'email': 'JOHN@School.EDU',
        'phone': '9876543210',
        'parent_name': 'Jane Doe',
        'parent_phone': '9123456789',
    }]


def test_read_normalizes_excel_dates(tmp_path):
    filepath = tmp_path / 'dates.xlsx'
    pd.DataFrame([{'Name': 'John Doe', 'DOB': datetime(2006, 9, 15)}]).to_excel(filepath, index=False, engine='openpyxl')

    rows = ExcelHandler().read_student_data(str(filepath), ['name', 'date_of_birth'])

    assert rows[0]['date_of_birth'] == '2006-09-15'


def test_read_missing_columns_returns_none(tmp_path):
    filepath = tmp_path / 'partial.xlsx'
    pd.DataFrame([{'name': 'John Doe'}]).to_excel(filepath, index=False, engine='openpyxl')

    assert ExcelHandler().read_student_data(str(filepath), STRICT_FIELDS) is None


def test_read_unreadable_file_returns_none(tmp_path):
    filepath = tmp_path / 'broken.xlsx'
    filepath.write_bytes(b'definitely not a workbook')

    assert ExcelHandler().read_student_data(str(filepath), STRICT_FIELDS) is None


def test_export_roster(tmp_path, strict_directory, strict_submission):
    strict_directory.submit(strict_submission)
    strict_directory.submit({**strict_submission, 'name': 'Mary Major'})
    handler = ExcelHandler(export_folder=str(tmp_path / 'exports'))

    filepath = handler.export_roster(strict_directory.students(), strict_directory.fields, {'name': 'Student Name'})

    assert filepath and os.path.exists(filepath)
    ws = openpyxl.load_workbook(filepath).active
    assert ws.cell(row=4, column=1).value == 'Student Name'
    assert ws.cell(row=4, column=2).value == 'email'
    assert ws.cell(row=5, column=1).value == 'Mary Major'
    assert ws.cell(row=6, column=1).value == 'John Doe'
    assert ws.cell(row=6, column=2).value == 'john@school.edu'


def test_sample_workbook_round_trips_through_reader(tmp_path, extended_directory):
    from sample_students import create_sample_student_data

    filepath = create_sample_student_data(str(tmp_path / 'sample_students.xlsx'), count=5)
    rows = ExcelHandler().read_student_data(filepath, extended_directory.fields)

    assert len(rows) == 5
    added, failed = extended_directory.submit_many(rows)
    assert failed == []


@pytest.mark.parametrize('cell', ['2008', '15/09/2006'])
def test_read_keeps_non_iso_dates_as_typed(tmp_path, extended_directory, cell):
    filepath = tmp_path / 'odd_dates.xlsx'
    pd.DataFrame([{'Name': 'John Doe', 'DOB': cell}]).to_excel(filepath, index=False, engine='openpyxl')

    rows = ExcelHandler().read_student_data(str(filepath), ['name', 'date_of_birth'])

    assert rows[0]['date_of_birth'] == cell
    assert 'date_of_birth' in extended_directory.engine.validate(rows[0]).errors
