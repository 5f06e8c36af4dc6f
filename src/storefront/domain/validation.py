"""Checkout form validation.

Returns a mapping of field name to message; fields without a problem
are omitted, so an empty dict means the input is valid.
"""

import re

from .models import CustomerDetails

# Bangladeshi mobile numbers: 01[3-9] + 8 digits, optional +880 prefix.
PHONE_PATTERN = re.compile(r"^(\+8801[3-9]\d{8}|01[3-9]\d{8})$")
PHONE_LENGTH = 11

NAME_REQUIRED = "Name is required."
ADDRESS_REQUIRED = "Address is required."
PHONE_REQUIRED = "Phone number is required."
PHONE_LENGTH_INVALID = "Phone number must be exactly 11 digits."
PHONE_FORMAT_INVALID = "Please enter a valid Bangladeshi phone number."


def validate_phone(phone: str) -> str | None:
    """Return the first applicable phone error, or None.

    Checked in order: required, length, format.
    """
    if not phone:
        return PHONE_REQUIRED
    if len(phone) != PHONE_LENGTH:
        return PHONE_LENGTH_INVALID
    if not PHONE_PATTERN.match(phone):
        return PHONE_FORMAT_INVALID
    return None


def validate(customer: CustomerDetails) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not customer.name.strip():
        errors["name"] = NAME_REQUIRED
    if not customer.address.strip():
        errors["address"] = ADDRESS_REQUIRED
    phone_error = validate_phone(customer.phone)
    if phone_error:
        errors["phone"] = phone_error
    return errors
