"""
Contact repository - data access for the contacts collection.
"""
from asocsemi.repositories.base import BaseRepository
from asocsemi.schemas.contact import Contact


class ContactRepository(BaseRepository[Contact]):
    def __init__(self):
        super().__init__("contacts", Contact)
