from __future__ import annotations

from enum import Enum

ALIASES = {"story": "stories", "poem": "poetry", "poems": "poetry"}


class Category(Enum):
    POETRY = "poetry"
    STORIES = "stories"

    @classmethod
    def parse(cls, value: str) -> "Category":
        key = value.strip().lower()
        key = ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            supported = ", ".join(member.value for member in cls)
            raise ValueError(f"unknown type {value!r} (expected one of: {supported})") from None

    @property
    def folder(self) -> str:
        return self.value

    @property
    def css_class(self) -> str:
        return self.value

    @property
    def stylesheet(self) -> str:
        return f"/{self.value}.css"

    @property
    def archive_title(self) -> str:
        return "Poetry Archive" if self is Category.POETRY else "Story Archive"

    @property
    def archive_filename(self) -> str:
        return "poetry-archive.html" if self is Category.POETRY else "story-archive.html"

    @property
    def archive_file(self) -> str:
        return f"{self.folder}/{self.archive_filename}"

    @property
    def archive_url(self) -> str:
        return f"/{self.archive_file}"

    @property
    def empty_message(self) -> str:
        return "No poems yet." if self is Category.POETRY else "No stories yet."
