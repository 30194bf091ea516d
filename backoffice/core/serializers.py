import re

from rest_framework import serializers

EMAIL_PATTERN = re.compile(r'^\S+@\S+\.\S+$')

ROLE_CHOICES = ['admin', 'superadmin']


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(error_messages={
        'required': 'Email is required.',
        'blank': 'Email is required.',
        'null': 'Email is required.',
    })
    password = serializers.CharField(trim_whitespace=False, error_messages={
        'required': 'Password is required.',
        'blank': 'Password is required.',
        'null': 'Password is required.',
    })
    remember = serializers.BooleanField(required=False, default=False)

    def validate_email(self, value):
        if not EMAIL_PATTERN.match(value):
            raise serializers.ValidationError('Enter a valid email address.')
        return value


class SignupSerializer(serializers.Serializer):
    """Account fields accepted by upstream ``/user/signup``"""
    username = serializers.CharField(error_messages={
        'required': 'Name must be at least 2 characters.',
        'blank': 'Name must be at least 2 characters.',
    })
    email = serializers.CharField(error_messages={
        'required': 'Enter a valid email address.',
        'blank': 'Enter a valid email address.',
    })
    password = serializers.CharField(trim_whitespace=False, error_messages={
        'required': 'Password must be at least 6 characters, include a letter and a number.',
        'blank': 'Password must be at least 6 characters, include a letter and a number.',
    })
    role = serializers.ChoiceField(choices=ROLE_CHOICES, error_messages={
        'required': 'Please select a role.',
        'blank': 'Please select a role.',
        'invalid_choice': 'Please select a role.',
    })

    def validate_username(self, value):
        if len(value) < 2:
            raise serializers.ValidationError('Name must be at least 2 characters.')
        return value

    def validate_email(self, value):
        if not EMAIL_PATTERN.match(value):
            raise serializers.ValidationError('Enter a valid email address.')
        return value

    def validate_password(self, value):
        if len(value) < 6 or not re.search(r'[A-Za-z]', value) or not re.search(r'\d', value):
            raise serializers.ValidationError(
                'Password must be at least 6 characters, include a letter and a number.'
            )
        return value


class PublicSignupSerializer(SignupSerializer):
    agree = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if not attrs.pop('agree', False):
            raise serializers.ValidationError({'agree': 'You must agree to the Terms and Privacy Policy.'})
        return attrs


class UserCreateSerializer(SignupSerializer):
    role = serializers.ChoiceField(choices=ROLE_CHOICES, default='admin', error_messages={
        'invalid_choice': 'Please select a role.',
    })


class UserUpdateSerializer(serializers.Serializer):
    """Edit form of the users screen; password stays unchanged when blank"""
    username = serializers.CharField(required=False)
    email = serializers.CharField(required=False)
    password = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    role = serializers.ChoiceField(choices=ROLE_CHOICES, required=False)

    def validate_username(self, value):
        if len(value) < 2:
            raise serializers.ValidationError('Name must be at least 2 characters.')
        return value

    def validate_email(self, value):
        if not EMAIL_PATTERN.match(value):
            raise serializers.ValidationError('Enter a valid email address.')
        return value

    def validate(self, attrs):
        if not attrs.get('password'):
            attrs.pop('password', None)
        if not attrs:
            raise serializers.ValidationError('No valid fields to update')
        return attrs
