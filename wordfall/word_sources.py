"""Word source implementations."""

import json
import logging
import os

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from . import vocabulary
from .errors import WordSourceUnavailable
from .interfaces import WordSource
from .models import Word
from .config import MAX_STARS

logger = logging.getLogger(__name__)


class WordRecord(BaseModel):
    """One entry of a JSON word list.

    Also accepts the learned-words export field names
    (english / turkish / package_name).
    """
    id: str | int
    target: str = Field(validation_alias=AliasChoices('target', 'english'))
    display_form: str = Field(default='', validation_alias=AliasChoices('display_form', 'turkish', 'translation'))
    category: str | None = Field(default=None, validation_alias=AliasChoices('category', 'package_name'))
    star_rating: int | None = 0

    @field_validator('target')
    @classmethod
    def target_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('target must not be blank')
        return value

    def to_word(self) -> Word:
        stars = min(max(self.star_rating or 0, 0), MAX_STARS)
        return Word(id=str(self.id), target=self.target, display_form=self.display_form or '',
                    category=self.category, star_rating=stars)


class StaticWordSource(WordSource):
    """Words from the built-in packages."""

    def __init__(self, packages: list[str] = None):
        self.packages = packages

    def list_words(self) -> list[Word]:
        words = []
        for item in vocabulary.get_seed_data():
            if self.packages and item['category'] not in self.packages:
                continue
            words.append(Word.from_dict(item))
        return words

    def list_categories(self) -> list[str]:
        if self.packages:
            return [p for p in vocabulary.get_all_packages() if p in self.packages]
        return vocabulary.get_all_packages()


class JsonWordSource(WordSource):
    """Read-only word list stored as JSON.

    The file holds either a list of records or {"words": [...]}. The file is
    re-read on every call so edits show up at the next round.
    """

    def __init__(self, path: str):
        self.path = os.path.expanduser(path)

    def _load_records(self) -> list:
        if not os.path.exists(self.path):
            raise WordSourceUnavailable(f"Word list not found at {self.path}")
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise WordSourceUnavailable(f"Cannot read word list {self.path}: {e}") from e
        if isinstance(data, dict):
            data = data.get('words')
        if not isinstance(data, list):
            raise WordSourceUnavailable(f"Word list {self.path} must contain a list of words")
        return data

    def list_words(self) -> list[Word]:
        records = self._load_records()
        try:
            words = [WordRecord.model_validate(r).to_word() for r in records]
        except ValidationError as e:
            raise WordSourceUnavailable(f"Invalid word list {self.path}: {e}") from e
        logger.info(f"Loaded {len(words)} words from {self.path}")
        return words
