"""URL-safe slug generation for public booking links."""

import re
import unicodedata

from sqlalchemy.orm import Session

from ..models import Business


def slugify(text: str) -> str:
    """Generate URL-safe slug from Spanish/English text ("Peluquería Ñandú" -> "peluqueria-nandu")."""
    s = unicodedata.normalize("NFD", text.lower())
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = re.sub(r"[^a-z0-9]+", "-", s).strip("-")
    return s or "negocio"


def unique_business_slug(db: Session, name: str, exclude_id: int | None = None) -> str:
    """slugify(name), suffixed -2, -3, ... until no other business uses it."""
    base = slugify(name)
    candidate = base
    counter = 1
    while True:
        query = db.query(Business.id).filter(Business.slug == candidate)
        if exclude_id is not None:
            query = query.filter(Business.id != exclude_id)
        if query.first() is None:
            return candidate
        counter += 1
        candidate = f"{base}-{counter}"
