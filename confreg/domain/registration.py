"""
Registration record - The validated, immutable result of one form submission.

Categorical Fields
==================

Each categorical attribute is a closed enumeration whose member values are the
literals the registration form submits. Lookup is an exact, case-sensitive
match; any other literal resolves to the enumeration's declared default member
through the ``_missing_`` hook, so an unknown value never raises.

    PriceCategory   student | regular                 default: Regular
    Title           other | msc | dr | prof           default: Other
    Presentation    poster | talk | none              default: NotPresenting
    Meal            meat | vegetarian | none          default: NoMeal

The persisted encoding of a member is its canonical name (``Student``,
``NotPresenting``, ``MeatEater``...), independent of the form literal.
"""

from dataclasses import dataclass
from enum import Enum


class Choice(str, Enum):
    """
    Base for categorical form fields with a default-fallback policy.

    Subclasses declare their default member name in ``__default__``.
    """

    @classmethod
    def default(cls) -> "Choice":
        return cls[cls.__default__]

    @classmethod
    def _missing_(cls, value: object) -> "Choice":
        return cls.default()

    @property
    def canonical(self) -> str:
        """Canonical textual encoding, e.g. NOT_PRESENTING -> NotPresenting."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def from_canonical(cls, encoded: str) -> "Choice":
        """Strict inverse of ``canonical``; raises ValueError for unknown names."""
        for member in cls:
            if member.canonical == encoded:
                return member
        raise ValueError(f"{encoded!r} is not a canonical {cls.__name__}")


class PriceCategory(Choice):
    __default__ = "REGULAR"

    STUDENT = "student"
    REGULAR = "regular"


class Title(Choice):
    __default__ = "OTHER"

    OTHER = "other"
    MSC = "msc"
    DR = "dr"
    PROF = "prof"


class Presentation(Choice):
    __default__ = "NOT_PRESENTING"

    POSTER = "poster"
    TALK = "talk"
    NOT_PRESENTING = "none"


class Meal(Choice):
    __default__ = "NO_MEAL"

    MEAT_EATER = "meat"
    VEGETARIAN = "vegetarian"
    NO_MEAL = "none"


def encode_bool(value: bool) -> str:
    return "1" if value else "0"


@dataclass(frozen=True)
class Registration:
    """
    One conference registration.

    Field order is the form extraction order; the mapper fails on the first
    field that does not validate, so a Registration is never partially built.
    """

    last_name: str
    first_name: str
    email: str
    institution: str
    project: str | None
    country: str | None
    course: str | None
    price_category: PriceCategory
    title: Title
    presentation: Presentation
    meal: Meal
    pay_cash: bool
    conference_dinner: bool
    more_info: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_row(self) -> dict[str, str | None]:
        """
        Textual encoding used by the persistence layer.

        Categories are stored by canonical name, booleans as "1"/"0",
        absent optional identifiers as NULL.
        """
        return {
            "last_name": self.last_name,
            "first_name": self.first_name,
            "email": self.email,
            "institution": self.institution,
            "project": self.project,
            "country": self.country,
            "course": self.course,
            "price_category": self.price_category.canonical,
            "title": self.title.canonical,
            "presentation": self.presentation.canonical,
            "meal": self.meal.canonical,
            "pay_cash": encode_bool(self.pay_cash),
            "conference_dinner": encode_bool(self.conference_dinner),
            "more_info": self.more_info,
        }
