from django import template
from django.utils import timezone

from ..listing import to_datetime

register = template.Library()

AVATAR_COLORS = [
    'blue',
    'emerald',
    'purple',
    'orange',
    'rose',
    'cyan',
]


@register.filter
def initials(name):
    """Up to two upper-cased initials, "NA" when there is no name."""
    if not name:
        return "NA"
    letters = ''.join(word[0] for word in str(name).split() if word)
    return letters.upper()[:2] or "NA"


@register.filter
def avatar_color(name):
    if not name:
        return AVATAR_COLORS[0]
    return AVATAR_COLORS[ord(str(name)[0]) % len(AVATAR_COLORS)]


@register.filter
def contact_date(value):
    created = to_datetime(value) if value else None
    if created is None:
        return "Unknown date"
    created = timezone.localtime(created)
    return f"{created.strftime('%b')} {created.day}, {created.year}"
