from django import template

from registry.services.hindi import to_hindi_text, to_hindi_number

register = template.Library()


@register.filter
def hindi_text(value):
    """Badge formatting for free text: ``{{ reg.address|hindi_text }}``."""
    if value is None:
        return ""
    return to_hindi_text(str(value))


@register.filter
def hindi_number(value):
    return to_hindi_number(value)
