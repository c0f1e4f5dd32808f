"""
Folio Modules
=============

Flask blueprint modules registered by the Folio extension.
"""

__all__ = ['posts', 'uploads', 'site']
