"""
Upload handler tests.
"""

import io
import os
import re

import pytest
from werkzeug.datastructures import FileStorage, MultiDict

from folio.core.errors import UploadError, UploadTooLargeError
from folio.core.storage import (
    build_filename, get_single_upload, save_upload, size_limit_message, stream_size,
    too_large_message,
)


def _file(name='pic.png', data=b'image-bytes'):
    return FileStorage(stream=io.BytesIO(data), filename=name)


def test_build_filename_keeps_extension():
    assert re.match(r'^\d{13}-\d+\.png$', build_filename('My Photo.PNG'))
    assert re.match(r'^\d{13}-\d+$', build_filename('no_extension'))


def test_build_filename_keeps_extension_of_non_ascii_name():
    assert re.match(r'^\d{13}-\d+\.png$', build_filename('日本語.png'))
    assert re.match(r'^\d{13}-\d+\.jpg$', build_filename('Fotoğraf.JPG'))


def test_build_filename_strips_paths():
    name = build_filename('../../etc/passwd.jpg')
    assert '/' not in name and name.endswith('.jpg')


def test_stream_size_rewinds():
    f = _file(data=b'x' * 10)
    f.stream.read(3)
    assert stream_size(f) == 10
    assert f.stream.tell() == 0


def test_save_upload_writes_file(tmp_dir):
    upload_dir = os.path.join(tmp_dir, 'fresh', 'uploads')
    path = save_upload(_file(), upload_dir, max_size=1024)

    assert path.startswith('/uploads/')
    stored = os.path.join(upload_dir, path.rsplit('/', 1)[1])
    with open(stored, 'rb') as f:
        assert f.read() == b'image-bytes'


def test_save_upload_rejects_oversized(tmp_dir):
    upload_dir = os.path.join(tmp_dir, 'uploads')
    with pytest.raises(UploadTooLargeError) as exc:
        save_upload(_file(data=b'x' * 11), upload_dir, max_size=10)

    assert exc.value.status_code == 400
    assert not os.path.exists(upload_dir)


def test_size_limit_message():
    assert size_limit_message(5 * 1024 * 1024) == 'File size too large. Maximum size is 5MB.'


def test_too_large_message():
    five_mb = 5 * 1024 * 1024
    assert too_large_message(9000, 'multipart/form-data; boundary=x', 1024, five_mb) == \
        'File size too large. Maximum size is 5MB.'
    assert too_large_message(9000, 'application/json', 1024, five_mb) == 'Request body too large'
    # under the body limit, so a form field went over its own limit
    assert too_large_message(900, 'multipart/form-data; boundary=x', 1024, five_mb) == 'Form data too large'
    assert too_large_message(9000, 'multipart/form-data; boundary=x', None, five_mb) == 'Form data too large'


def test_get_single_upload():
    f = _file()
    assert get_single_upload(MultiDict([('featured_image', f)]), 'featured_image') is f
    assert get_single_upload(MultiDict(), 'featured_image') is None
    # an empty file input arrives with no filename
    assert get_single_upload(MultiDict([('featured_image', _file(name=''))]), 'featured_image') is None


def test_get_single_upload_rejects_extra_files():
    with pytest.raises(UploadError):
        get_single_upload(MultiDict([('other', _file())]), 'featured_image')
    with pytest.raises(UploadError):
        get_single_upload(MultiDict([('featured_image', _file()), ('featured_image', _file())]),
                          'featured_image')
