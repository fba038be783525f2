from .listing import SORT_ORDERS, derive_view, normalize_sort_key
from .validation import MESSAGE_MAX_LENGTH, MESSAGES, REQUIRED_FIELDS, is_valid, validate_contact


class ContactFormState:
    """
    Values, displayed errors and touched fields for the "add contact" form.

    Field rules come from ``validate_contact``, plus the message length cap.
    This class only decides which errors are shown and when.
    """

    FIELDS = ('name', 'email', 'phone', 'message')

    def __init__(self, data=None):
        self.values = {field: '' for field in self.FIELDS}
        self.errors = {}
        self.touched = set()
        if data:
            for field in self.FIELDS:
                if data.get(field) is not None:
                    self.values[field] = str(data.get(field))

    def _check_field(self, field):
        if field not in self.FIELDS:
            raise KeyError(f"Unknown contact field: {field}")

    def _all_errors(self):
        # the message is optional but still bounded by what the store accepts
        errors = validate_contact(self.values)
        if len(self.values['message'].strip()) > MESSAGE_MAX_LENGTH:
            errors['message'] = MESSAGES['message_too_long']
        return errors

    def change(self, field, value):
        self._check_field(field)
        self.values[field] = value if value is not None else ''
        self.errors.pop(field, None)

    def blur(self, field):
        """Mark ``field`` touched and surface its error, if any."""
        self._check_field(field)
        self.touched.add(field)
        field_error = self._all_errors().get(field)
        if field_error:
            self.errors[field] = field_error

    @property
    def current_errors(self):
        return self._all_errors()

    @property
    def can_submit(self):
        return is_valid(self.current_errors)

    def submit(self):
        """Show every error and report whether the form can be sent."""
        self.errors = self._all_errors()
        self.touched.update(REQUIRED_FIELDS)
        if 'message' in self.errors:
            self.touched.add('message')
        return is_valid(self.errors)

    def reset(self):
        self.values = {field: '' for field in self.FIELDS}
        self.errors = {}
        self.touched = set()

    def visible_error(self, field):
        if field in self.touched:
            return self.errors.get(field)
        return None

    def payload(self):
        return {field: self.values[field].strip() for field in self.FIELDS}


class ListViewState:
    """Search and sort settings for the contact list."""

    def __init__(self, query='', sort_key='created_at', sort_order='desc'):
        sort_key = normalize_sort_key(sort_key)
        if sort_order not in SORT_ORDERS:
            raise ValueError(f"Unknown sort order: {sort_order!r}")
        self.query = query or ''
        self.sort_key = sort_key
        self.sort_order = sort_order
        self._cache_key = None
        self._cache = None

    def set_query(self, query):
        self.query = query or ''

    def toggle_sort(self, sort_key):
        """Same key flips the direction, a new key starts ascending."""
        sort_key = normalize_sort_key(sort_key)
        if sort_key == self.sort_key:
            self.sort_order = 'asc' if self.sort_order == 'desc' else 'desc'
        else:
            self.sort_key = sort_key
            self.sort_order = 'asc'

    def view(self, records):
        # Recomputed only when the settings or the identity of any record change
        records = tuple(records)
        settings = (self.query, self.sort_key, self.sort_order)
        if not self._is_cached(records, settings):
            self._cache = derive_view(records, *settings)
            self._cache_key = (records, settings)
        return list(self._cache)

    def _is_cached(self, records, settings):
        if self._cache_key is None:
            return False
        cached_records, cached_settings = self._cache_key
        if cached_settings != settings or len(cached_records) != len(records):
            return False
        return all(a is b for a, b in zip(cached_records, records))

    def as_params(self, **overrides):
        params = {'q': self.query, 'sort': self.sort_key, 'order': self.sort_order}
        params.update(overrides)
        return {key: value for key, value in params.items() if value}
