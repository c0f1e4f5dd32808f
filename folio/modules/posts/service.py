"""
Post Service
============

Create/read/update/delete for blog posts, composed from the post, tag and
association stores plus the upload handler. Takes its Database handle
explicitly so any storage (a temp file in tests) can be injected.
"""

import json
import logging

from folio.core.errors import ValidationError, NotFoundError
from folio.core.storage import save_upload
from . import database as store

logger = logging.getLogger(__name__)


def parse_tags(raw):
    """Normalize the transported tag list.

    Accepts a real list (JSON bodies), a JSON-encoded array, or a comma
    separated string; malformed JSON falls back to the comma split. Names
    are trimmed, empties dropped, duplicates dropped keeping the first.
    """
    if raw is None or raw == '':
        return []

    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.debug(f"Tags are not JSON, splitting on commas: {raw!r}")
            parsed = None
        if isinstance(parsed, list):
            items = parsed
        elif isinstance(parsed, str):
            items = parsed.split(',')
        else:
            items = raw.split(',')
    elif isinstance(raw, (list, tuple)):
        items = raw
    else:
        raise ValidationError('Tags must be a list or a string')

    tags = []
    for item in items:
        if item is None:
            continue
        name = str(item).strip()
        if name and name not in tags:
            tags.append(name)
    return tags


def validate_status(status):
    if status not in store.POST_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(store.POST_STATUSES)}")
    return status


class PostService:
    """Blog post operations against one Database"""

    def __init__(self, database, upload_dir=None, max_upload_size=5 * 1024 * 1024,
                 upload_url_prefix='/uploads'):
        self.database = database
        self.upload_dir = upload_dir
        self.max_upload_size = max_upload_size
        self.upload_url_prefix = upload_url_prefix

    def _read_fields(self, data):
        title = str(data.get('title') or '').strip()
        if not title:
            raise ValidationError('Title is required')
        return {
            'title': title,
            'content': data.get('content'),
            'excerpt': data.get('excerpt'),
            'status': validate_status(data.get('status') or 'draft'),
            'tags': parse_tags(data.get('tags')),
        }

    def _save_image(self, image):
        if image is None:
            return None
        return save_upload(image, self.upload_dir, self.max_upload_size, self.upload_url_prefix)

    # ===== Reads =====

    def list_posts(self, status=None):
        if status is not None:
            validate_status(status)
        with self.database.connection() as conn:
            return store.get_all_posts(conn, status)

    def get_post(self, post_id):
        with self.database.connection() as conn:
            post = store.get_post_by_id(conn, post_id)
        if not post:
            raise NotFoundError('Post not found')
        return post

    def get_post_by_slug(self, slug):
        with self.database.connection() as conn:
            post = store.get_post_by_slug(conn, slug)
        if not post:
            raise NotFoundError('Post not found')
        return post

    # ===== Writes =====

    def create_post(self, data, image=None):
        """Insert a post with its tags and return the composed record.

        The image is written before the transaction opens, so it stays on
        disk if the insert fails.
        """
        fields = self._read_fields(data)
        featured_image = self._save_image(image)

        with self.database.transaction() as conn:
            slug = store.unique_slug(conn, fields['title'])
            post_id = store.insert_post(
                conn, fields['title'], slug, fields['content'], fields['excerpt'],
                featured_image, fields['status']
            )
            store.replace_post_tags(conn, post_id, fields['tags'])

        logger.info(f"Created post {post_id} '{slug}' with tags {fields['tags']}")
        return self.get_post(post_id)

    def update_post(self, post_id, data, image=None):
        """Update scalar fields, optionally the image, and resync tags.

        The row update and the association delete/insert commit together
        or not at all. The slug keeps its creation-time value and a
        replaced image file is left on disk.
        """
        fields = self._read_fields(data)

        with self.database.connection() as conn:
            if not store.post_exists(conn, post_id):
                raise NotFoundError('Post not found')

        featured_image = self._save_image(image)

        with self.database.transaction() as conn:
            changed = store.update_post(
                conn, post_id, fields['title'], fields['content'], fields['excerpt'],
                fields['status'], featured_image
            )
            if not changed:
                raise NotFoundError('Post not found')
            store.replace_post_tags(conn, post_id, fields['tags'])

        logger.info(f"Updated post {post_id} with tags {fields['tags']}")
        return self.get_post(post_id)

    def delete_post(self, post_id):
        """Remove associations then the post; NotFoundError if no such post"""
        with self.database.transaction() as conn:
            store.delete_post_tags(conn, post_id)
            if not store.delete_post(conn, post_id):
                raise NotFoundError('Post not found')

        logger.info(f"Deleted post {post_id}")
        return True
