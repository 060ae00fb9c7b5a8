# members/constants/membership.py
"""
Membership-related choices shared across the project.

The unit configuration (siteconfig) uses Section for the unit type, so these
live here rather than on the Person model to keep the import graph one-way.
"""

from django.db import models


class PersonType(models.TextChoices):
    LEADER = "leader", "Leader"
    GIRL = "girl", "Girl"


class Section(models.TextChoices):
    """Age-banded sections, youngest first."""

    RAINBOW = "rainbow", "Rainbow"
    BROWNIE = "brownie", "Brownie"
    GUIDE = "guide", "Guide"
    RANGER = "ranger", "Ranger"


class PhotoPermission(models.TextChoices):
    NONE = "none", "No photos"
    UNIT_ONLY = "unit_only", "Unit use only"
    FULL = "full", "Full permission"


STATUS_ALIASES = {
    "active": True,
    "inactive": False,
}
