import uuid

from django.db import models

from .validation import EMAIL_MAX_LENGTH, MESSAGE_MAX_LENGTH, NAME_MAX_LENGTH


class Contact(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=NAME_MAX_LENGTH)
    email = models.CharField(max_length=EMAIL_MAX_LENGTH)
    phone = models.CharField(max_length=40)
    message = models.CharField(max_length=MESSAGE_MAX_LENGTH, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.name} ({self.email})"

    class Meta:
        ordering = ['-created_at']
