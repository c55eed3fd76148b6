"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from docchat.boundary.db.CRUD import session_crud, document_crud, message_crud

    # Use singleton instances
    chat_session = await session_crud.get_by_id(db, session_id)
"""

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.CRUD.session_crud import SessionCRUD, session_crud
from docchat.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from docchat.boundary.db.CRUD.message_crud import MessageCRUD, message_crud

__all__ = [
    "BaseCRUD",
    "SessionCRUD",
    "session_crud",
    "DocumentCRUD",
    "document_crud",
    "MessageCRUD",
    "message_crud",
]
