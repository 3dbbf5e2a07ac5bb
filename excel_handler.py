import pandas as pd
import openpyxl
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter
import os
import logging
from datetime import datetime
from typing import Optional, Dict, List, Sequence

from models import Student


class ExcelHandler:
    # Accepted spreadsheet headings for each form field, after normalizing
    # to lower case with underscores
    COLUMN_MAPPINGS = {
        'student_id': ['student_id', 'roll_number', 'roll_no', 'enrollment_no', 'id'],
        'name': ['name', 'student_name', 'full_name'],
        'email': ['email', 'email_id', 'email_address'],
        'phone': ['phone', 'student_phone', 'mobile', 'phone_number'],
        'date_of_birth': ['date_of_birth', 'dob', 'birth_date'],
        'gender': ['gender', 'sex'],
        'course': ['course', 'department', 'course_/_department'],
        'parent_name': ['parent_name', 'guardian_name', 'parent'],
        'parent_phone': ['parent_phone', 'guardian_phone', 'parent_mobile'],
        'address': ['address', 'residential_address'],
    }

    def __init__(self, export_folder: str = 'exports'):
        self.logger = logging.getLogger(__name__)
        self.export_folder = export_folder

    def read_student_data(self, filepath: str, fields: Sequence[str]) -> Optional[List[Dict[str, str]]]:
        """
        Read raw student submissions from an Excel file.
        Every field in ``fields`` needs a matching column. Returns one dict
        of text values per row, or None if the file can't be used.
        """
        try:
            df = pd.read_excel(filepath, dtype=str)

            # Normalize column names (handle case variations and spaces)
            df.columns = df.columns.astype(str).str.strip().str.lower().str.replace(' ', '_')

            mapped_columns = {}
            for field in fields:
                for possible_name in self.COLUMN_MAPPINGS.get(field, [field]):
                    if possible_name in df.columns:
                        mapped_columns[field] = possible_name
                        break

            missing_columns = [field for field in fields if field not in mapped_columns]
            if missing_columns:
                self.logger.error(f"Missing columns: {missing_columns}")
                return None

            result_df = pd.DataFrame()
            for field, original_name in mapped_columns.items():
                result_df[field] = df[original_name]

            result_df = self._clean_student_data(result_df)

            return result_df.to_dict('records')

        except Exception as e:
            self.logger.error(f"Error reading Excel file: {str(e)}")
            return None

    def _clean_student_data(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Turn spreadsheet cells into form text. Validation happens later,
        so nothing is dropped here except completely empty rows.
        """
        df = df.fillna('')

        for col in df.columns:
            df[col] = df[col].astype(str).str.strip()

        # Excel dates arrive as '2005-03-14 00:00:00'; anything else is left
        # for the form rules to judge
        if 'date_of_birth' in df.columns:
            df['date_of_birth'] = df['date_of_birth'].str.replace(
                r'^([0-9]{4}-[0-9]{2}-[0-9]{2})[ T]00:00:00$', r'\1', regex=True
            )

        df = df[(df != '').any(axis=1)]
        return df

    def export_roster(self, students: Sequence[Student], fields: Sequence[str],
                      labels: Optional[Dict[str, str]] = None) -> Optional[str]:
        """
        Export the roster to an Excel file, newest student first.
        """
        try:
            labels = labels or {}
            os.makedirs(self.export_folder, exist_ok=True)

            wb = openpyxl.Workbook()
            ws = wb.active
            if ws is not None:
                ws.title = "Students"

            header_font = Font(bold=True, size=12, color="FFFFFF")
            header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
            border = Border(
                left=Side(style='thin'),
                right=Side(style='thin'),
                top=Side(style='thin'),
                bottom=Side(style='thin')
            )
            center_alignment = Alignment(horizontal='center', vertical='center')

            last_column = get_column_letter(len(fields))
            ws['A1'] = "Student Directory"
            ws['A1'].font = Font(bold=True, size=14)
            ws.merge_cells(f'A1:{last_column}1')

            ws['A2'] = f"Exported {datetime.now().strftime('%Y-%m-%d %H:%M')} - {len(students)} student(s)"
            ws.merge_cells(f'A2:{last_column}2')

            for col, field in enumerate(fields, 1):
                cell = ws.cell(row=4, column=col, value=labels.get(field, field))
                cell.font = header_font
                cell.fill = header_fill
                cell.border = border
                cell.alignment = center_alignment

            row_num = 5
            for student in students:
                record = student.to_dict()
                for col, field in enumerate(fields, 1):
                    cell = ws.cell(row=row_num, column=col, value=record.get(field))
                    cell.border = border
                row_num += 1

            # Auto-adjust column widths
            for col_idx in range(1, len(fields) + 1):
                max_length = 0
                column_letter = get_column_letter(col_idx)
                for row_idx in range(4, row_num):
                    cell = ws.cell(row=row_idx, column=col_idx)
                    if cell.value:
                        max_length = max(max_length, len(str(cell.value)))
                ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            filepath = os.path.join(self.export_folder, f"students_export_{timestamp}.xlsx")
            wb.save(filepath)

            self.logger.info(f"Exported {len(students)} students to {filepath}")
            return filepath

        except Exception as e:
            self.logger.error(f"Error exporting students: {str(e)}")
            return None
