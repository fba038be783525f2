import unicodedata
from collections.abc import Mapping
from datetime import date, datetime, timezone as dt_timezone

from django.utils import timezone
from django.utils.dateparse import parse_datetime


SORT_KEYS = ('name', 'created_at')
SORT_KEY_ALIASES = {'createdAt': 'created_at'}
SORT_ORDERS = ('asc', 'desc')

# camelCase is accepted for records that arrive straight from JSON payloads
FIELD_ALIASES = {
    'created_at': ('created_at', 'createdAt'),
}


def get_field(record, field):
    """Read ``field`` from a dict-like record or a model instance, ``None`` if absent."""
    for name in FIELD_ALIASES.get(field, (field,)):
        if isinstance(record, Mapping):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if value is not None:
            return value
    return None


def matches_query(record, query):
    """Case-insensitive on name and email, plain substring on phone."""
    needle = query.lower()
    name = get_field(record, 'name')
    if isinstance(name, str) and needle in name.lower():
        return True
    email = get_field(record, 'email')
    if isinstance(email, str) and needle in email.lower():
        return True
    phone = get_field(record, 'phone')
    if isinstance(phone, str) and needle in phone:
        return True
    return False


def collation_key(text):
    """
    Approximate locale collation: accents and case only break ties after the
    base letters compare equal.
    """
    decomposed = unicodedata.normalize('NFKD', text)
    base = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    # lowercase before uppercase on the final tie, as ICU does
    return (base.casefold(), text.casefold(), text.swapcase())


def to_datetime(value):
    if isinstance(value, str):
        try:
            value = parse_datetime(value)
        except ValueError:
            # well-formed but impossible, e.g. February 30th
            return None
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if not isinstance(value, datetime):
        return None
    if timezone.is_naive(value):
        value = timezone.make_aware(value, dt_timezone.utc)
    return value


def normalize_sort_key(sort_key):
    sort_key = SORT_KEY_ALIASES.get(sort_key, sort_key)
    if sort_key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_key!r}")
    return sort_key


def _sort_key(sort_key):
    if sort_key == 'name':
        def key(record):
            name = get_field(record, 'name')
            if not isinstance(name, str):
                return (0, ())
            return (1, collation_key(name))
    else:
        def key(record):
            created = to_datetime(get_field(record, 'created_at'))
            if created is None:
                return (0, 0.0)
            return (1, created.timestamp())
    return key


def derive_view(records, query='', sort_key='created_at', sort_order='desc'):
    """
    Return a new list holding the records that match ``query``, ordered by
    ``sort_key`` in ``sort_order``.

    The input sequence is never mutated. Sorting is stable in both directions,
    so records with equal keys keep their input order. Records missing the
    sort field sort before all others in ascending order. ``createdAt`` is
    accepted as a sort key alias for ``created_at``.
    """
    sort_key = normalize_sort_key(sort_key)
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {sort_order!r}")

    # blank queries keep everything; otherwise match the query as typed
    query = query or ''
    if query.strip():
        result = [record for record in records if matches_query(record, query)]
    else:
        result = list(records)

    result.sort(key=_sort_key(sort_key), reverse=(sort_order == 'desc'))
    return result
