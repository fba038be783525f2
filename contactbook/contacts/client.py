import logging

import requests

logger = logging.getLogger(__name__)


class ContactsAPIError(Exception):
    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ContactsClient:
    """
    Client for the contacts REST API that keeps a local copy of the list.

    The local list only changes after the server confirms an operation, so a
    failed create never adds a record and a failed delete never removes one.
    """

    def __init__(self, base_url, session=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout
        self.headers = {
            'Content-Type': 'application/json',
        }
        self.contacts = []

    def _url(self, contact_id=None):
        if contact_id is None:
            return f"{self.base_url}/contacts/"
        return f"{self.base_url}/contacts/{contact_id}/"

    def _request(self, method, url, **kwargs):
        try:
            response = self.session.request(
                method, url, headers=self.headers, timeout=self.timeout, **kwargs
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Contacts API {method} {url} failed: {str(e)}")
            raise ContactsAPIError(str(e)) from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not 200 <= response.status_code < 300:
            message = payload.get('message') if isinstance(payload, dict) else None
            logger.error(f"Contacts API {method} {url} returned {response.status_code}: {response.text}")
            raise ContactsAPIError(
                message or f"API error: {response.status_code}",
                status_code=response.status_code,
                payload=payload,
            )
        return payload

    def fetch(self):
        """Replace the local list with the server's, newest first."""
        payload = self._request('GET', self._url())
        self.contacts = list(payload or [])
        return self.contacts

    def create(self, data):
        payload = self._request('POST', self._url(), json=data)
        contact = payload['contact']
        self.contacts = [contact] + self.contacts
        logger.info(f"Contact added: {contact.get('id')}")
        return contact

    def delete(self, contact_id):
        try:
            self._request('DELETE', self._url(contact_id))
        except ContactsAPIError as e:
            # already gone on the server, so it should not linger locally
            if e.status_code != 404:
                raise
        self.contacts = [c for c in self.contacts if str(c.get('id')) != str(contact_id)]

    def find(self, contact_id):
        for contact in self.contacts:
            if str(contact.get('id')) == str(contact_id):
                return contact
        return None

    def visible(self, list_state):
        return list_state.view(self.contacts)
