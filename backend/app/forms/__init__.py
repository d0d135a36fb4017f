"""
Form controllers
"""

from app.forms.profile_form import ProfileForm, image_preview, parse_leading_int

__all__ = ["ProfileForm", "image_preview", "parse_leading_int"]
