"""Registry of known lexica, their families and letter distributions.

The registry is a JSON document::

    {
      "data_dir": "lexica",
      "families": [{"name": "TWL", "symbol": "$", "siblings": ["CSW"]}, ...],
      "distributions": [...],
      "lexica": [
        {"name": "NWL2018", "family": "TWL", "order": 4,
         "filename": "NWL2018.txt", "difficulties": "NWL2018-difficulty.txt"}
      ]
    }

``families`` and ``distributions`` are optional; the TWL/CSW split and the
English distribution are always available.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, PrivateAttr, ValidationError, field_validator, model_validator

from lexicon_db.errors import SetupError, UnknownLexiconError

from .alphabet import BUILTIN_DISTRIBUTIONS, LetterDistribution
from .dictionary import WordDictionary
from .difficulty import load_difficulties

logger = logging.getLogger(__name__)

UPDATE_SYMBOL = "+"


class LexiconFamily(BaseModel):
    """A line of successive editions sharing one exclusivity marker."""

    name: str
    symbol: str = Field(min_length=1)
    siblings: list[str] = Field(default_factory=list)

    @field_validator("name", mode="before")
    def normalize_name(cls, v: str) -> str:
        return str(v).strip().upper()

    @field_validator("siblings", mode="before")
    def normalize_siblings(cls, v: list[str]) -> list[str]:
        return [str(s).strip().upper() for s in v or []]


DEFAULT_FAMILIES: tuple[LexiconFamily, ...] = (
    LexiconFamily(name="TWL", symbol="$", siblings=["CSW"]),
    LexiconFamily(name="CSW", symbol="#", siblings=["TWL"]),
)


class LexiconInfo(BaseModel):
    name: str
    family: str
    order: int
    filename: Path
    distribution: str = "english"
    difficulties: Optional[Path] = None
    description: str = ""

    _dictionary: Optional[WordDictionary] = PrivateAttr(default=None)
    _difficulty_table: Optional[dict[str, int]] = PrivateAttr(default=None)

    @field_validator("family", mode="before")
    def normalize_family(cls, v: str) -> str:
        return str(v).strip().upper()

    @property
    def initialized(self) -> bool:
        return self._dictionary is not None

    def initialize(self) -> "LexiconInfo":
        """Load the word dictionary once."""

        if self._dictionary is None:
            if not self.filename.is_file():
                raise SetupError(f"word list for {self.name} not found at '{self.filename}'")
            self._dictionary = WordDictionary.from_word_list(self.filename, name=self.name)
        return self

    @property
    def dictionary(self) -> WordDictionary:
        return self.initialize()._dictionary

    @property
    def difficulty_table(self) -> dict[str, int]:
        if self._difficulty_table is None:
            if self.difficulties is None:
                self._difficulty_table = {}
            else:
                self._difficulty_table = load_difficulties(self.difficulties)
        return self._difficulty_table


class LexiconRegistry(BaseModel):
    data_dir: Optional[Path] = None
    families: list[LexiconFamily] = Field(default_factory=lambda: list(DEFAULT_FAMILIES))
    distributions: list[LetterDistribution] = Field(default_factory=list)
    lexica: list[LexiconInfo] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_consistency(self) -> "LexiconRegistry":
        family_names = {f.name for f in self.families}
        for family in self.families:
            unknown = [s for s in family.siblings if s not in family_names]
            if unknown:
                raise ValueError(f"family {family.name} names unknown siblings {unknown}")

        seen: set[str] = set()
        orders: set[tuple[str, int]] = set()
        for lex in self.lexica:
            if lex.name in seen:
                raise ValueError(f"lexicon {lex.name} is registered twice")
            seen.add(lex.name)
            if lex.family not in family_names:
                raise ValueError(f"lexicon {lex.name} belongs to unknown family {lex.family}")
            if (lex.family, lex.order) in orders:
                raise ValueError(f"two {lex.family} editions share order {lex.order}")
            orders.add((lex.family, lex.order))
            if lex.distribution not in self._distribution_map():
                raise ValueError(
                    f"lexicon {lex.name} uses unknown distribution {lex.distribution}"
                )
        return self

    @classmethod
    def load(cls, path: str | Path) -> "LexiconRegistry":
        registry_path = Path(path)
        try:
            raw = registry_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SetupError(f"cannot read lexicon registry '{registry_path}': {exc}") from exc
        try:
            registry = cls.model_validate_json(raw)
        except ValidationError as exc:
            raise SetupError(f"invalid lexicon registry '{registry_path}': {exc}") from exc

        base = registry.data_dir or Path(".")
        if not base.is_absolute():
            base = registry_path.parent / base
        registry.data_dir = base.resolve()
        for lex in registry.lexica:
            lex.filename = registry.resolve_path(lex.filename)
            if lex.difficulties is not None:
                lex.difficulties = registry.resolve_path(lex.difficulties)
        logger.info(
            "Loaded lexicon registry",
            extra={"path": str(registry_path), "lexica": len(registry.lexica)},
        )
        return registry

    def resolve_path(self, path: Path) -> Path:
        if path.is_absolute() or self.data_dir is None:
            return path
        return self.data_dir / path

    def _distribution_map(self) -> dict[str, LetterDistribution]:
        mapping = dict(BUILTIN_DISTRIBUTIONS)
        mapping.update({d.name: d for d in self.distributions})
        return mapping

    def get(self, name: str) -> LexiconInfo:
        for lex in self.lexica:
            if lex.name == name:
                return lex
        raise UnknownLexiconError(name)

    def family(self, family_name: str) -> LexiconFamily:
        for family in self.families:
            if family.name == family_name:
                return family
        raise SetupError(f"lexicon family {family_name!r} is not in the registry")

    def family_of(self, name: str) -> LexiconFamily:
        return self.family(self.get(name).family)

    def distribution_for(self, name: str) -> LetterDistribution:
        return self._distribution_map()[self.get(name).distribution]

    def editions(self, family_name: str) -> list[LexiconInfo]:
        return sorted(
            (lex for lex in self.lexica if lex.family == family_name),
            key=lambda lex: lex.order,
        )

    def prior_edition(self, family_name: str, name: str) -> Optional[LexiconInfo]:
        """The edition immediately before *name* in its family, if any."""

        current = self.get(name)
        earlier = [lex for lex in self.editions(family_name) if lex.order < current.order]
        return earlier[-1] if earlier else None

    def latest_in_family(self, family_name: str) -> Optional[LexiconInfo]:
        """The newest edition of a family, initialized; ``None`` for an empty family."""

        editions = self.editions(family_name)
        if not editions:
            return None
        return editions[-1].initialize()


__all__ = [
    "DEFAULT_FAMILIES",
    "LexiconFamily",
    "LexiconInfo",
    "LexiconRegistry",
    "UPDATE_SYMBOL",
]
