"""
Parsing Service

Functions for parsing fractions, recipe ingredient lines, size fields
and receipt lines.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from .conversion import normalize_unit
from .errors import InvalidFormat

DECIMAL_RE = re.compile(r'^\d*\.?\d+$')
FRACTION_RE = re.compile(r'^(\d+)/(\d+)$')

# "Flour: 2 cups", "Brown Sugar: 1 1/2 tablespoons"
INGREDIENT_LINE_RE = re.compile(
    r'^(.+):\s*([\d\s/.]+)\s*(cups?|tablespoons?|teaspoons?)$',
    re.IGNORECASE,
)

# Trailing "<number><letters>", e.g. "5 lb", "2.5oz", "1 1/2 cups"
SIZE_FIELD_RE = re.compile(r'([\d\s/.]+)\s*([a-zA-Z]+)$')

# Leading number of a price field: "4.99 ea" -> 4.99
LEADING_NUMBER_RE = re.compile(r'[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?')


@dataclass(frozen=True)
class Quantity:
    amount: float
    unit: str


@dataclass(frozen=True)
class ParsedLine:
    name: str
    display_name: str
    quantity: float
    unit: str


def _parse_simple_fraction(text):
    match = FRACTION_RE.match(text)
    if not match:
        raise InvalidFormat(f'Not a fraction: {text!r}')
    numerator, denominator = int(match.group(1)), int(match.group(2))
    if denominator == 0:
        raise InvalidFormat(f'Zero denominator: {text!r}')
    return numerator / denominator


def parse_fraction(text):
    """
    Parse a quantity string like '2', '1.5', '1/2' or '1 1/2' into a float.

    Raises:
        InvalidFormat: for any other shape, or a zero denominator
    """
    if text is None:
        raise InvalidFormat('Empty quantity')
    text = str(text).strip()
    if not text:
        raise InvalidFormat('Empty quantity')

    if DECIMAL_RE.match(text):
        return float(text)

    parts = text.split()
    if len(parts) == 1:
        return _parse_simple_fraction(parts[0])
    if len(parts) == 2:
        whole, fraction = parts
        if not whole.isdigit():
            raise InvalidFormat(f'Not a whole number: {whole!r}')
        return int(whole) + _parse_simple_fraction(fraction)
    raise InvalidFormat(f'Unrecognized quantity: {text!r}')


def parse_ingredient_line(text):
    """
    Parse a recipe line of the form 'Name: <quantity> <unit>'.

    Only cups, tablespoons and teaspoons are accepted. Returns None when
    the line does not match so callers can skip and report it.
    """
    if not text:
        return None
    match = INGREDIENT_LINE_RE.match(text.strip())
    if not match:
        return None
    try:
        quantity = parse_fraction(match.group(2))
    except InvalidFormat:
        return None

    display_name = match.group(1).strip()
    return ParsedLine(
        name=display_name.lower(),
        display_name=display_name,
        quantity=quantity,
        unit=normalize_unit(match.group(3)),
    )


def parse_size_field(text):
    """Parse a loose size like '5 lb' or '2 1/4 cups' into a Quantity, or None."""
    if not text:
        return None
    match = SIZE_FIELD_RE.search(str(text).strip())
    if not match:
        return None
    try:
        amount = parse_fraction(match.group(1))
    except InvalidFormat:
        return None
    return Quantity(amount=amount, unit=normalize_unit(match.group(2)))


def format_amount(value):
    """Render a quantity for storage in a size field ('2', '1.5', '0.333333')."""
    if value == int(value):
        return str(int(value))
    return f"{value:.6f}".rstrip('0').rstrip('.')


def parse_receipt_line(text):
    """Split a receipt line 'name: size: price' into its parts."""
    parts = [part.strip() for part in text.split(':')]
    parts += [''] * (3 - len(parts))
    return {'name': parts[0], 'size': parts[1], 'price': parts[2]}


def parse_price(value):
    """
    Parse a price like '4.99', '$4.99' or '4.99 ea' from its leading number.

    Returns None when the text does not start with a number.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        price = float(value)
    else:
        text = str(value).strip().lstrip('$').replace(',', '')
        match = LEADING_NUMBER_RE.match(text)
        if not match:
            return None
        price = float(match.group(0))
    return price if math.isfinite(price) else None


def receipt_total(lines):
    """Sum the prices of receipt lines that carry name, size and price."""
    total = 0.0
    for line in lines:
        if line.count(':') < 2:
            continue
        price = parse_price(parse_receipt_line(line)['price'])
        if price is not None:
            total += price
    return round(total, 2)
