import os

from flask import Flask, render_template, request, make_response, flash, redirect, url_for
from werkzeug.utils import secure_filename

from config import config
from components.errors import UploadValidationError
from components.extractor import extract_project
from components.logger import LogCapture, get_logger
from components.table_processor import occurrences_to_table, records_to_table, to_csv_string
from components.validators import validate_upload
from components.xml_parser import TIME_UNITS, decode_project_bytes, int_or_none

logger = get_logger()

app = Flask(__name__)
app.secret_key = config.SECRET_KEY or os.urandom(24).hex()  # Needed for flashing messages
app.config['MAX_CONTENT_LENGTH'] = config.MAX_UPLOAD_SIZE

@app.route('/', methods=['GET'])
def index():
    """Render the main upload page."""
    return render_template('index.html', default_fps=config.DEFAULT_FPS, time_units=TIME_UNITS)

@app.route('/upload', methods=['POST'])
def upload_file():
    """Handle file upload and processing."""
    file = request.files.get('file')
    try:
        validate_upload(file, request.content_length)
    except UploadValidationError as e:
        flash(str(e))
        return redirect(url_for('index'))

    frame_rate = None
    fps_field = request.form.get('fps', '').strip()
    if fps_field:
        frame_rate = int_or_none(fps_field)
        if frame_rate is None or frame_rate <= 0:
            flash(f'Invalid frame rate: {fps_field}')
            return redirect(url_for('index'))

    time_unit = request.form.get('time_unit') or None
    sort = request.form.get('sort') == 'on'
    expand_nested = request.form.get('keep_nested') != 'on'

    original_filename = secure_filename(file.filename)
    xml_content = decode_project_bytes(file.read())

    try:
        with LogCapture() as log_stream:
            records, occurrences = extract_project(
                xml_content,
                frame_rate=frame_rate,
                time_unit=time_unit,
                expand_nested=expand_nested,
                sort=sort,
            )
        debug_logs = log_stream.getvalue().splitlines()
    except ValueError as e:
        logger.error(f"Extraction of '{original_filename}' failed: {e}")
        flash(str(e))
        return redirect(url_for('index'))

    headers, rows = records_to_table(records)
    instance_headers, instance_rows = occurrences_to_table(occurrences)
    return render_template('results.html',
                           filename=original_filename,
                           headers=headers,
                           rows=rows,
                           csv_content=to_csv_string(headers, rows),
                           instance_headers=instance_headers,
                           instance_rows=instance_rows,
                           instances_csv_content=to_csv_string(instance_headers, instance_rows),
                           debug_logs=debug_logs)

@app.route('/download', methods=['POST'])
def download_csv():
    """Send a CSV rendered on the results page back as a file download."""
    csv_content = request.form.get('csv_content', '')
    per_instance = request.form.get('table') == 'instances'
    if not csv_content:
        flash('Nothing to download. Please process a project first.')
        return redirect(url_for('index'))

    response = make_response(csv_content)
    response.headers['Content-Type'] = 'text/csv; charset=utf-8'
    filename = config.INSTANCES_CSV_FILENAME if per_instance else config.CSV_FILENAME
    response.headers['Content-Disposition'] = f'attachment; filename={filename}'
    return response


if __name__ == '__main__':
    app.run(debug=True)
