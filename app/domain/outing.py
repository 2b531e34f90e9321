"""Outing enums shared by the form controller, models, and scoring."""

from __future__ import annotations

from enum import Enum


class VenueType(str, Enum):
    """Where the user will spend the outing."""

    INDOOR = "Indoor"
    OUTDOOR = "Outdoor"

    @classmethod
    def _missing_(cls, value):
        # The web client labels its toggle "Indoors" / "Outdoors"
        if isinstance(value, str):
            normalized = value.strip().lower().rstrip("s")
            for member in cls:
                if member.value.lower() == normalized:
                    return member
        return None


class Gender(str, Enum):
    """Optional gender choice offered by the form."""

    MALE = "Male"
    FEMALE = "Female"
    PREFER_NOT_TO_SAY = "Prefer Not to Say"


__all__ = ["Gender", "VenueType"]
