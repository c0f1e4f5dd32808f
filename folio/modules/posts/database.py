"""
Posts Database
==============

Schema and parameterized SQL for posts, tags and the post_tags join.
Every function takes an open sqlite3 connection so callers decide the
transaction scope.
"""

import re
import logging

logger = logging.getLogger(__name__)

# ASCII unit separator: tag names may contain commas
TAG_SEPARATOR = '\x1f'

# Millisecond timestamps keep creation order strict within one second
NOW_SQL = "(strftime('%Y-%m-%d %H:%M:%f', 'now'))"

POST_STATUSES = ('draft', 'published')

SCHEMA = f'''
    CREATE TABLE IF NOT EXISTS posts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        slug TEXT NOT NULL,
        content TEXT,
        excerpt TEXT,
        featured_image TEXT,
        status TEXT NOT NULL DEFAULT 'draft' CHECK (status IN ('draft', 'published')),
        created_at TIMESTAMP DEFAULT {NOW_SQL},
        updated_at TIMESTAMP DEFAULT {NOW_SQL}
    );

    CREATE TABLE IF NOT EXISTS tags (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE
    );

    CREATE TABLE IF NOT EXISTS post_tags (
        post_id INTEGER NOT NULL REFERENCES posts(id),
        tag_id INTEGER NOT NULL REFERENCES tags(id),
        PRIMARY KEY (post_id, tag_id)
    );

    CREATE INDEX IF NOT EXISTS idx_posts_slug ON posts(slug);
    CREATE INDEX IF NOT EXISTS idx_posts_created_at ON posts(created_at);
    CREATE INDEX IF NOT EXISTS idx_post_tags_tag ON post_tags(tag_id);
'''

POST_SELECT = '''
    SELECT p.*, GROUP_CONCAT(t.name, ?) AS tags
    FROM posts p
    LEFT JOIN post_tags pt ON p.id = pt.post_id
    LEFT JOIN tags t ON pt.tag_id = t.id
'''


def init_posts_db(database):
    """Create posts, tags and post_tags if they don't exist"""
    database.ensure_directory()
    database.executescript(SCHEMA)
    logger.info(f"Posts database initialized at {database.path}")


def slugify(title):
    """Lowercase, collapse non-alphanumeric runs to '-', trim the ends"""
    slug = re.sub(r'[^a-z0-9]+', '-', (title or '').lower())
    return slug.strip('-')


def split_tags(value):
    """GROUP_CONCAT result back to a list; no tags gives []"""
    if not value:
        return []
    return value.split(TAG_SEPARATOR)


def _row_to_post(row):
    post = dict(row)
    post['tags'] = split_tags(post.get('tags'))
    return post


# ===== Post Store =====

def unique_slug(conn, title):
    """Slug for a new post, suffixed with -1, -2... while taken"""
    base_slug = slugify(title) or 'post'
    slug = base_slug
    counter = 1
    while conn.execute('SELECT 1 FROM posts WHERE slug = ?', (slug,)).fetchone():
        slug = f"{base_slug}-{counter}"
        counter += 1
    return slug


def insert_post(conn, title, slug, content, excerpt, featured_image, status):
    cursor = conn.execute(
        'INSERT INTO posts (title, slug, content, excerpt, featured_image, status) '
        'VALUES (?, ?, ?, ?, ?, ?)',
        (title, slug, content, excerpt, featured_image, status)
    )
    return cursor.lastrowid


def update_post(conn, post_id, title, content, excerpt, status, featured_image=None):
    """Update scalar columns; featured_image only when a new one is given.

    Returns the number of rows changed.
    """
    fields = ['title = ?', 'content = ?', 'excerpt = ?', 'status = ?', f'updated_at = {NOW_SQL}']
    params = [title, content, excerpt, status]

    if featured_image:
        fields.append('featured_image = ?')
        params.append(featured_image)

    params.append(post_id)
    cursor = conn.execute(f"UPDATE posts SET {', '.join(fields)} WHERE id = ?", params)
    return cursor.rowcount


def delete_post(conn, post_id):
    cursor = conn.execute('DELETE FROM posts WHERE id = ?', (post_id,))
    return cursor.rowcount


def post_exists(conn, post_id):
    return conn.execute('SELECT 1 FROM posts WHERE id = ?', (post_id,)).fetchone() is not None


def get_post_by_id(conn, post_id):
    row = conn.execute(
        POST_SELECT + ' WHERE p.id = ? GROUP BY p.id', (TAG_SEPARATOR, post_id)
    ).fetchone()
    return _row_to_post(row) if row else None


def get_post_by_slug(conn, slug):
    row = conn.execute(
        POST_SELECT + ' WHERE p.slug = ? GROUP BY p.id', (TAG_SEPARATOR, slug)
    ).fetchone()
    return _row_to_post(row) if row else None


def get_all_posts(conn, status=None):
    """All posts newest first, each with its tag list"""
    if status:
        rows = conn.execute(
            POST_SELECT + ' WHERE p.status = ? GROUP BY p.id ORDER BY p.created_at DESC, p.id DESC',
            (TAG_SEPARATOR, status)
        ).fetchall()
    else:
        rows = conn.execute(
            POST_SELECT + ' GROUP BY p.id ORDER BY p.created_at DESC, p.id DESC',
            (TAG_SEPARATOR,)
        ).fetchall()
    return [_row_to_post(row) for row in rows]


def count_posts(conn):
    return conn.execute('SELECT COUNT(*) FROM posts').fetchone()[0]


# ===== Tag Store =====

def get_or_create_tag(conn, name):
    """Id of the tag called `name`, inserting it on first use"""
    row = conn.execute('SELECT id FROM tags WHERE name = ?', (name,)).fetchone()
    if row:
        return row['id']
    return conn.execute('INSERT INTO tags (name) VALUES (?)', (name,)).lastrowid


# ===== Post-Tag Association Store =====

def delete_post_tags(conn, post_id):
    return conn.execute('DELETE FROM post_tags WHERE post_id = ?', (post_id,)).rowcount


def add_post_tag(conn, post_id, tag_id):
    conn.execute('INSERT INTO post_tags (post_id, tag_id) VALUES (?, ?)', (post_id, tag_id))


def replace_post_tags(conn, post_id, tag_names):
    """Association reconciliation: drop every link, then link each name"""
    delete_post_tags(conn, post_id)
    for name in tag_names:
        add_post_tag(conn, post_id, get_or_create_tag(conn, name))
