"""
Google Docs and Drive helpers
"""
from .drive import list_files
from .resolver import GoogleDocumentResolver, document_id_from_link

__all__ = ['GoogleDocumentResolver', 'document_id_from_link', 'list_files']
