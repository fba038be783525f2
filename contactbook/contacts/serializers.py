from rest_framework import serializers

from .models import Contact
from .validation import MESSAGE_MAX_LENGTH, validate_contact


class ContactSerializer(serializers.ModelSerializer):
    class Meta:
        model = Contact
        fields = ['id', 'name', 'email', 'phone', 'message', 'created_at']
        read_only_fields = ['id', 'created_at']


class ContactCreateSerializer(serializers.Serializer):
    name = serializers.CharField(required=True, allow_blank=True)
    email = serializers.CharField(required=True, allow_blank=True)
    phone = serializers.CharField(required=True, allow_blank=True)
    message = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=MESSAGE_MAX_LENGTH
    )

    def validate(self, attrs):
        errors = validate_contact(attrs)
        if errors:
            raise serializers.ValidationError(errors)
        if attrs.get('message') is None:
            attrs['message'] = ''
        return attrs
