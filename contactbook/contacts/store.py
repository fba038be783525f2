import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError

from .models import Contact

logger = logging.getLogger(__name__)


class ContactStoreError(Exception):
    """The database could not complete a contact operation."""


class ContactNotFound(ContactStoreError):
    def __init__(self, contact_id):
        super().__init__(f"Contact {contact_id} not found")
        self.contact_id = contact_id


class ContactStore:
    """
    Persistence for contacts. ``id`` and ``created_at`` are always assigned
    here and never taken from the caller.
    """

    WRITABLE_FIELDS = ('name', 'email', 'phone', 'message')

    def create(self, data):
        fields = {
            field: data[field]
            for field in self.WRITABLE_FIELDS
            if data.get(field) is not None
        }
        try:
            contact = Contact.objects.create(**fields)
        except DatabaseError as e:
            logger.error(f"Error creating contact: {e}")
            raise ContactStoreError(str(e)) from e
        logger.info(f"Contact created: {contact.id}")
        return contact

    def list(self):
        try:
            return list(Contact.objects.order_by('-created_at'))
        except DatabaseError as e:
            logger.error(f"Error retrieving contacts: {e}")
            raise ContactStoreError(str(e)) from e

    def get(self, contact_id):
        try:
            return Contact.objects.get(id=contact_id)
        except (Contact.DoesNotExist, ValidationError):
            raise ContactNotFound(contact_id)
        except DatabaseError as e:
            logger.error(f"Error retrieving contact {contact_id}: {e}")
            raise ContactStoreError(str(e)) from e

    def delete_by_id(self, contact_id):
        try:
            deleted, _ = Contact.objects.filter(id=contact_id).delete()
        except ValidationError:
            # not a UUID, so it cannot name a stored contact
            deleted = 0
        except DatabaseError as e:
            logger.error(f"Error deleting contact {contact_id}: {e}")
            raise ContactStoreError(str(e)) from e
        if not deleted:
            logger.warning(f"Delete requested for unknown contact {contact_id}")
            raise ContactNotFound(contact_id)
        logger.info(f"Contact deleted: {contact_id}")


contact_store = ContactStore()
