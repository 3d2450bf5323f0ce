import io
import os
import tempfile

from flask import Flask, jsonify, request, send_file
from werkzeug.utils import secure_filename

from statementtables.config import ExtractionConfig
from statementtables.converter import MODES, StatementConverter
from statementtables.exceptions import ExtractionServiceError, StatementError
from statementtables.exporters import FORMATS, export_rows, export_transactions

MIMETYPES = {
  'csv': 'text/csv',
  'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
  'json': 'application/json',
}


def create_app(config=None, extractor=None):
  app = Flask(__name__)
  extraction_config = config or ExtractionConfig.from_env()
  app.config['MAX_CONTENT_LENGTH'] = extraction_config.max_file_size
  app.config['UPLOAD_FOLDER'] = tempfile.mkdtemp(prefix='statementtables_')
  converter = StatementConverter(extraction_config, extractor)

  def upload_error():
    """Validate the uploaded PDF, returning an error response or None."""
    if 'file' not in request.files:
      return jsonify({'success': False, 'error': 'No file uploaded'}), 400
    file = request.files['file']
    if not file or file.filename == '':
      return jsonify({'success': False, 'error': 'No file selected'}), 400
    if not file.filename.lower().endswith('.pdf'):
      return jsonify({'success': False, 'error': 'Invalid file type. Please upload a PDF.'}), 400
    return None

  def save_upload(job_dir):
    file = request.files['file']
    path = os.path.join(job_dir, secure_filename(file.filename) or 'statement.pdf')
    file.save(path)
    return path

  def requested_mode():
    mode = request.form.get('mode', 'rows')
    return mode if mode in MODES else None

  def failure(e):
    if isinstance(e, ExtractionServiceError):
      return jsonify({'success': False, 'error': str(e)}), 502
    if isinstance(e, StatementError):
      return jsonify({'success': False, 'error': str(e)}), 400
    app.logger.exception(f'Error processing upload: {e}')
    return jsonify({'success': False, 'error': f'Error processing file: {str(e)}'}), 500

  @app.route('/health')
  def health():
    return jsonify({'status': 'ok'})

  @app.route('/extract', methods=['POST'])
  def extract():
    mode = requested_mode()
    if mode is None:
      return jsonify({'success': False, 'error': f'mode must be one of {", ".join(MODES)}'}), 400
    error = upload_error()
    if error:
      return error

    # one directory per request
    with tempfile.TemporaryDirectory(dir=app.config['UPLOAD_FOLDER']) as job_dir:
      path = save_upload(job_dir)
      try:
        if mode == 'transactions':
          records = converter.extract_transactions(path)
          data = [r.to_dict() for r in records]
        else:
          data = converter.extract_rows(path)
      except Exception as e:
        return failure(e)

    if not data:
      return jsonify({'success': False, 'error': 'No data could be extracted. The document might be empty or in an unsupported format.'}), 422
    return jsonify({'success': True, 'mode': mode, 'count': len(data), 'data': data})

  @app.route('/export', methods=['POST'])
  def export():
    mode = requested_mode()
    fmt = request.form.get('format', 'csv')
    if mode is None or fmt not in FORMATS:
      return jsonify({'success': False, 'error': 'Unsupported mode or format'}), 400
    error = upload_error()
    if error:
      return error

    with tempfile.TemporaryDirectory(dir=app.config['UPLOAD_FOLDER']) as job_dir:
      path = save_upload(job_dir)
      stem = os.path.splitext(os.path.basename(path))[0]
      out_path = os.path.join(job_dir, f'{stem}.{fmt}')
      try:
        if mode == 'transactions':
          export_transactions(converter.extract_transactions(path), out_path)
        else:
          export_rows(converter.extract_rows(path), out_path)
      except Exception as e:
        return failure(e)
      with open(out_path, 'rb') as f:
        payload = io.BytesIO(f.read())

    return send_file(payload, as_attachment=True, download_name=f'{stem}.{fmt}',
                     mimetype=MIMETYPES[fmt])

  return app


if __name__ == '__main__':
  create_app().run(debug=os.environ.get('FLASK_DEBUG', 'False').lower() == 'true',
                   host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
