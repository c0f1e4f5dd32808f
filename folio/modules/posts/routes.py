"""
Posts API Routes
================

GET    /api/posts               -- all posts with tags, newest first
GET    /api/posts/slug/<slug>   -- one post
POST   /api/posts               -- create (multipart, optional featured_image)
PUT    /api/posts/<id>          -- update (multipart, optional featured_image)
DELETE /api/posts/<id>          -- delete
"""

import logging
from flask import request, jsonify, current_app
from werkzeug.exceptions import RequestEntityTooLarge

from folio.core import get_setting, db_log
from folio.core.errors import FolioError, UploadTooLargeError
from folio.core.storage import get_single_upload, too_large_message
from . import posts_bp

logger = logging.getLogger(__name__)


def _get_service():
    """PostService built by the Folio extension for this app"""
    return current_app.extensions['folio'].post_service


def _parse_request():
    """(fields, image) from the request.

    Form fields for multipart/urlencoded bodies, otherwise the JSON body.
    """
    try:
        if request.form or request.files:
            data = request.form
        else:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                data = {}
        image = get_single_upload(request.files, get_setting('UPLOAD_FIELD'))
    except RequestEntityTooLarge:
        raise UploadTooLargeError(too_large_message(
            request.content_length, request.content_type,
            current_app.config.get('MAX_CONTENT_LENGTH'), get_setting('MAX_UPLOAD_SIZE'),
        ))
    return data, image


def _failure(message, error):
    logger.error(f"{message}: {error}")
    db_log('error', 'posts', message, {'error': str(error)})
    return jsonify({'error': message, 'details': str(error)}), 500


@posts_bp.route('', methods=['GET'])
def list_posts():
    """All posts, optionally ?status=draft|published"""
    try:
        posts = _get_service().list_posts(request.args.get('status'))
        logger.info(f"Found {len(posts)} posts")
        return jsonify(posts)
    except FolioError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        return _failure('Failed to fetch posts', e)


@posts_bp.route('/slug/<slug>', methods=['GET'])
def get_post_by_slug(slug):
    try:
        return jsonify(_get_service().get_post_by_slug(slug))
    except FolioError as e:
        logger.info(f"Post not found: {slug}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        return _failure('Failed to fetch post', e)


@posts_bp.route('', methods=['POST'])
def create_post():
    try:
        post = _get_service().create_post(*_parse_request())
        db_log('info', 'posts', f"Post created: {post['title']}", {'id': post['id'], 'slug': post['slug']})
        return jsonify(post), 201
    except FolioError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        return _failure('Failed to create post', e)


@posts_bp.route('/<int:post_id>', methods=['PUT'])
def update_post(post_id):
    try:
        post = _get_service().update_post(post_id, *_parse_request())
        db_log('info', 'posts', f"Post updated: {post['title']}", {'id': post_id})
        return jsonify(post)
    except FolioError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        return _failure('Failed to update post', e)


@posts_bp.route('/<int:post_id>', methods=['DELETE'])
def delete_post(post_id):
    try:
        _get_service().delete_post(post_id)
        db_log('info', 'posts', f"Post deleted: {post_id}")
        return jsonify({'success': True})
    except FolioError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        return _failure('Failed to delete post', e)
