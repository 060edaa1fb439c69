from __future__ import annotations

from .categories import Category
from .content import slugify


def resolve(category: Category | str, title: str) -> tuple[str, str]:
    """Return ``(file_path, url_path)`` for a page, e.g.
    ``("./poetry/my-poem.html", "/poetry/my-poem.html")``."""
    if not isinstance(category, Category):
        category = Category.parse(category)
    relative = f"{category.folder}/{slugify(title)}.html"
    return f"./{relative}", f"/{relative}"
