import os
import logging
from flask import Flask, render_template, request, redirect, url_for, flash, jsonify, send_file
from werkzeug.utils import secure_filename
from directory import StudentDirectory
from excel_handler import ExcelHandler
from sample_students import create_sample_submissions

# Set up logging
logging.basicConfig(level=logging.DEBUG)

app = Flask(__name__)
app.secret_key = os.environ.get("SESSION_SECRET", "dev-secret-key-change-in-production")

# Configuration
UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', 'uploads')
EXPORT_FOLDER = os.environ.get('EXPORT_FOLDER', 'exports')
ALLOWED_EXTENSIONS = {'xlsx', 'xls'}
XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
MAX_SAMPLE_STUDENTS = 200

app.config['UPLOAD_FOLDER'] = UPLOAD_FOLDER
app.config['EXPORT_FOLDER'] = EXPORT_FOLDER
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024  # 16MB max file size
app.config['STUDENT_RULE_SET'] = os.environ.get('STUDENT_RULE_SET', 'extended')

# The roster lives here for as long as the app runs
app.config['STUDENT_DIRECTORY'] = StudentDirectory(app.config['STUDENT_RULE_SET'])


def get_directory() -> StudentDirectory:
    return app.config['STUDENT_DIRECTORY']


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def field_labels(directory):
    return {field: spec.label for field, spec in directory.rule_set.items()}


def render_index(errors=None, values=None, status=200):
    directory = get_directory()
    return render_template('index.html',
                           rule_set=directory.rule_set,
                           students=directory.students(),
                           student_count=directory.count(),
                           errors=errors or {},
                           values=values or {}), status


@app.route('/')
def index():
    return render_index()


@app.route('/add_student', methods=['POST'])
def add_student():
    outcome = get_directory().submit(request.form)
    flash(outcome.notification.message, outcome.notification.flash_category)

    if not outcome.ok:
        return render_index(errors=outcome.errors, values=outcome.values, status=400)

    return redirect(url_for('index'))


@app.route('/delete_student', methods=['POST'])
def delete_student():
    """Delete a student. An unknown id is ignored."""
    student_id = request.form.get('student_id', '').strip()

    if student_id and get_directory().remove(student_id):
        flash('Student deleted', 'info')

    return redirect(url_for('index'))


@app.route('/get_student_data')
def get_student_data():
    directory = get_directory()
    return jsonify({
        'students': [s.to_dict() for s in directory.students()],
        'count': directory.count(),
        'rule_set': directory.rule_set_name
    })


@app.route('/api/students', methods=['POST'])
def api_add_student():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Expected a JSON object of field values'}), 400

    outcome = get_directory().submit(data)
    if not outcome.ok:
        return jsonify({
            'message': outcome.notification.message,
            'errors': outcome.errors
        }), 400

    return jsonify({
        'message': outcome.notification.message,
        'student': outcome.student.to_dict()
    }), 201


@app.route('/api/students/<student_id>', methods=['DELETE'])
def api_delete_student(student_id):
    directory = get_directory()
    removed = directory.remove(student_id)
    return jsonify({'removed': removed, 'count': directory.count()})


@app.route('/upload_students', methods=['POST'])
def upload_students():
    try:
        if 'file' not in request.files:
            flash('No file selected', 'error')
            return redirect(url_for('index'))

        file = request.files['file']
        if file.filename == '':
            flash('No file selected', 'error')
            return redirect(url_for('index'))

        if file and file.filename and allowed_file(file.filename):
            os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)
            filename = secure_filename(file.filename)
            filepath = os.path.join(app.config['UPLOAD_FOLDER'], filename)
            file.save(filepath)

            directory = get_directory()
            try:
                rows = ExcelHandler().read_student_data(filepath, directory.fields)
            finally:
                os.remove(filepath)

            if rows is not None:
                added, failed = directory.submit_many(rows)
                if failed:
                    failed_rows = ', '.join(str(f['row']) for f in failed[:10])
                    flash(f'Added {len(added)} students; {len(failed)} rows failed validation (rows {failed_rows})', 'warning')
                else:
                    flash(f'Successfully uploaded {len(added)} students', 'success')
            else:
                flash('Error processing Excel file. Please check the format.', 'error')
        else:
            flash('Invalid file type. Please upload an Excel file (.xlsx or .xls)', 'error')

    except Exception as e:
        logging.error(f"Error uploading file: {str(e)}")
        flash(f'Error uploading file: {str(e)}', 'error')

    return redirect(url_for('index'))


@app.route('/export_students', methods=['POST'])
def export_students():
    """Export students data to Excel"""
    try:
        directory = get_directory()
        if not directory.count():
            flash('No student data to export', 'warning')
            return redirect(url_for('index'))

        excel_handler = ExcelHandler(export_folder=app.config['EXPORT_FOLDER'])
        filepath = excel_handler.export_roster(directory.students(), directory.fields, field_labels(directory))

        if filepath and os.path.exists(filepath):
            filename = os.path.basename(filepath)
            return send_file(os.path.abspath(filepath), mimetype=XLSX_MIMETYPE,
                             as_attachment=True, download_name=filename)

        flash('Error exporting students', 'error')
        return redirect(url_for('index'))

    except Exception as e:
        logging.error(f"Error exporting students: {str(e)}")
        flash('Error exporting students', 'error')
        return redirect(url_for('index'))


@app.route('/load_sample_data', methods=['POST'])
def load_sample_data():
    try:
        count = int(request.form.get('count', 10))
        if not 1 <= count <= MAX_SAMPLE_STUDENTS:
            flash(f'Number of sample students must be between 1 and {MAX_SAMPLE_STUDENTS}', 'error')
            return redirect(url_for('index'))

        directory = get_directory()
        samples = create_sample_submissions(count, directory.rule_set_name, today=directory.engine.today())
        added, failed = directory.submit_many(samples)
        if failed:
            logging.warning(f"{len(failed)} generated sample students failed validation: {failed}")
        flash(f'Sample data loaded: {len(added)} students', 'success')
    except ValueError:
        flash('Invalid number of sample students', 'error')
    except Exception as e:
        logging.error(f"Error loading sample data: {str(e)}")
        flash('Error loading sample data', 'error')

    return redirect(url_for('index'))


@app.route('/clear_data', methods=['POST'])
def clear_data():
    get_directory().clear()
    flash('Student data cleared', 'info')
    return redirect(url_for('index'))


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=5000, debug=True)
