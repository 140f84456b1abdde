"""
Registration mapper - Builds a Registration from a form-parameter map.

Pure function, no I/O. Fields are extracted in declaration order and the first
failure propagates unchanged; errors are not accumulated.
"""

from collections.abc import Mapping

from email_validator import EmailNotValidError, validate_email

from .exceptions import InvalidValue
from .fields import (
    extract_bool,
    extract_choice,
    extract_optional_str,
    extract_required_str,
    extract_str,
)
from .registration import Meal, Presentation, PriceCategory, Registration, Title


def map_registration(params: Mapping[str, object]) -> Registration:
    """
    Map submitted form parameters to a Registration.

    Args:
        params: Form field name -> submitted value

    Returns:
        Fully populated Registration

    Raises:
        MissingField: First required field that is absent or blank
        InvalidValue: First field holding a value outside its accepted set
    """
    last_name = extract_required_str(params, "last_name")
    first_name = extract_required_str(params, "first_name")
    email = _normalize_email(extract_required_str(params, "email"))
    institution = extract_required_str(params, "institution")
    project = extract_optional_str(params, "project")
    country = extract_optional_str(params, "country")
    course = extract_optional_str(params, "course")
    price_category = extract_choice(params, "price_category", PriceCategory)
    title = extract_choice(params, "title", Title)
    presentation = extract_choice(params, "presentation", Presentation)
    meal = extract_choice(params, "meal", Meal)
    pay_cash = extract_bool(params, "pay_cash")
    conference_dinner = extract_bool(params, "conference_dinner")
    more_info = extract_str(params, "more_info", default="")

    return Registration(
        last_name=last_name,
        first_name=first_name,
        email=email,
        institution=institution,
        project=project,
        country=country,
        course=course,
        price_category=price_category,
        title=title,
        presentation=presentation,
        meal=meal,
        pay_cash=pay_cash,
        conference_dinner=conference_dinner,
        more_info=more_info,
    )


def _normalize_email(email: str) -> str:
    """
    Validate address syntax and normalize it.

    No DNS lookup; the domain part is lowercased by email-validator.
    """
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError:
        raise InvalidValue("email", email) from None
