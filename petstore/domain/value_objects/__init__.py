"""Immutable value objects guarding pet input."""

from .pet_name import PetName
from .photo_urls import PhotoUrls
from .tags import Tags

__all__ = ["PetName", "PhotoUrls", "Tags"]
