import re


EMAIL_REGEX = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')

# Shape check only: accepts plenty of numbers no carrier would route.
PHONE_REGEX = re.compile(
    r'\+?'
    r'(?:\d{1,4}[-\s.]?)?'
    r'(?:\(\d{1,4}\)[-\s.]?)?'
    r'\d{1,4}[-\s.]?\d{1,4}[-\s.]?\d{1,9}'
)
WHITESPACE_REGEX = re.compile(r'\s')

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
PHONE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 1000

REQUIRED_FIELDS = ('name', 'email', 'phone')

MESSAGES = {
    'name_required': "Name is required",
    'name_too_short': f"Name must be at least {NAME_MIN_LENGTH} characters",
    'name_too_long': f"Name must be less than {NAME_MAX_LENGTH} characters",
    'email_required': "Email is required",
    'email_invalid': "Please enter a valid email address",
    'email_too_long': f"Email must be less than {EMAIL_MAX_LENGTH} characters",
    'phone_required': "Phone number is required",
    'phone_invalid': "Please enter a valid phone number",
    'message_too_long': f"Message must be less than {MESSAGE_MAX_LENGTH} characters",
}


def is_valid_email(text):
    """Check ``local@domain.tld`` shape. No DNS or mailbox lookup."""
    if not isinstance(text, str):
        return False
    return EMAIL_REGEX.fullmatch(text) is not None


def is_valid_phone(text):
    """
    Whitespace is stripped first; the rest must be at least 10 characters and
    look like a phone number (optional ``+``, optional ``(area)`` group, then
    digit groups separated by ``-``, ``.`` or nothing).
    """
    if not isinstance(text, str):
        return False
    compact = WHITESPACE_REGEX.sub('', text)
    if len(compact) < PHONE_MIN_LENGTH:
        return False
    return PHONE_REGEX.fullmatch(compact) is not None


def _value(record, field):
    value = record.get(field) if record else None
    if value is None:
        return ''
    return str(value)


def validate_contact(record):
    """
    Validate a contact payload and return a ``{field: message}`` dict.

    Each field reports at most one error, the first rule it fails. ``message``
    is optional and never checked here. Missing or ``None`` values count as
    empty. An empty dict means the record is valid.
    """
    errors = {}

    name = _value(record, 'name').strip()
    if not name:
        errors['name'] = MESSAGES['name_required']
    elif len(name) < NAME_MIN_LENGTH:
        errors['name'] = MESSAGES['name_too_short']
    elif len(name) > NAME_MAX_LENGTH:
        errors['name'] = MESSAGES['name_too_long']

    email = _value(record, 'email').strip()
    if not email:
        errors['email'] = MESSAGES['email_required']
    elif not is_valid_email(email):
        errors['email'] = MESSAGES['email_invalid']
    elif len(email) > EMAIL_MAX_LENGTH:
        errors['email'] = MESSAGES['email_too_long']

    phone = _value(record, 'phone').strip()
    if not phone:
        errors['phone'] = MESSAGES['phone_required']
    elif not is_valid_phone(phone):
        errors['phone'] = MESSAGES['phone_invalid']

    return errors


def is_valid(errors):
    return not errors
