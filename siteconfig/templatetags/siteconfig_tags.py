from django import template

from siteconfig.models import UnitConfiguration

register = template.Library()


@register.simple_tag
def get_unitconfig():
    return UnitConfiguration.objects.first()
