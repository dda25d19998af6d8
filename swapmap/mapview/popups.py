"""Popup content for listing markers."""

from __future__ import annotations

from markupsafe import Markup

from ..core import GeoItem
from ..utils import truncate_text
from .templates import environment

DESCRIPTION_PREVIEW_CHARS = 160


def item_popup(item: GeoItem) -> Markup:
    """Render the rich popup shown for a listing marker."""

    template = environment().get_template("popup.html")
    return Markup(
        template.render(
            item=item,
            description=truncate_text(item.description, DESCRIPTION_PREVIEW_CHARS),
            detail_url=f"/items/{item.identifier}",
        )
    )
