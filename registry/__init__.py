"""Registry application for the sangat backend.

This package contains the registration model, the Hindi transliteration
used on printed badges, serializers, views and route registrations.
"""
