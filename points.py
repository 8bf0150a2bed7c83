import math
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from models import Item, Receipt

RECEIPT_DATE_FORMAT = '%Y-%m-%d'
RECEIPT_TIME_FORMAT = '%H:%M'
POINTS_RETAILER_NAME_ALPHANUM_CHARACTER = 1
POINTS_TOTAL_HAS_NO_CENTS = 50
POINTS_TOTAL_IS_MULTIPLE_OF_QUARTERS = 25
POINTS_ITEMS_COUNT = 5
POINTS_ITEM_DESCRIPTION = Decimal("0.2")
POINTS_ODD_PURCHASE_DAY = 6
POINTS_VALID_PURCHASE_HOUR = 10
REWARD_ITEM_DESCRIPTION_LENGTH_FACTOR = 3
REWARD_QUARTER_CENTS = 25
REWARD_HOUR = 14
CENTS_PER_DOLLAR = 100
MAX_AMOUNT = Decimal("1e15")
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
TIME_PATTERN = re.compile(r"[0-9]{2}:[0-9]{2}")


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parses a monetary string into a Decimal. Returns None unless the text is a
    finite number below MAX_AMOUNT in magnitude.
    """
    try:
        amount = Decimal(text.strip())
    except (InvalidOperation, AttributeError, TypeError, ValueError):
        return None
    if not amount.is_finite() or amount.copy_abs() >= MAX_AMOUNT:
        return None
    return amount


def parse_price(text: str) -> Decimal:
    """ Parses a monetary string, degrading malformed input to zero """
    amount = parse_amount(text)
    return amount if amount is not None else Decimal(0)


def to_cents(amount: Decimal) -> int:
    """ Converts a decimal amount to integer cents, truncating toward zero """
    return int(amount * CENTS_PER_DOLLAR)


def is_alphanumeric(c: str) -> bool:
    return c.isascii() and c.isalnum()


def score_retailer(retailer_name: str) -> int:
    """ One point per ASCII letter or digit in the retailer name """
    return sum(POINTS_RETAILER_NAME_ALPHANUM_CHARACTER for c in retailer_name if is_alphanumeric(c))


def score_round_dollar(total: str) -> int:
    """ Total whose canonical two-digit form ends in .00 """
    amount = parse_amount(total)
    if amount is None:
        return 0
    # "10", "10.0" and "10.00" all normalize to 10.00
    if to_cents(amount) % CENTS_PER_DOLLAR == 0:
        return POINTS_TOTAL_HAS_NO_CENTS
    return 0


def score_quarter_multiple(total: str) -> int:
    """ Total whose cents are a multiple of 25 """
    if to_cents(parse_price(total)) % REWARD_QUARTER_CENTS == 0:
        return POINTS_TOTAL_IS_MULTIPLE_OF_QUARTERS
    return 0


def score_item_pairs(items: Sequence[Item]) -> int:
    return (len(items) // 2) * POINTS_ITEMS_COUNT


def score_item_description(item: Item) -> int:
    """
    Awards ceil(price * 0.2) when the trimmed description length is a multiple of 3.
    An empty description (length 0) qualifies; a negative price awards nothing.
    """
    if len(item.short_description.strip()) % REWARD_ITEM_DESCRIPTION_LENGTH_FACTOR != 0:
        return 0
    return max(0, math.ceil(parse_price(item.price) * POINTS_ITEM_DESCRIPTION))


def score_items(items: Sequence[Item]) -> int:
    """ Item pair bonus plus the per-item description bonus """
    return score_item_pairs(items) + sum(score_item_description(item) for item in items)


def parse_purchase_date(date: str) -> Optional[datetime]:
    """ Parses a zero-padded YYYY-MM-DD date, returning None if it is malformed """
    if not isinstance(date, str) or not DATE_PATTERN.fullmatch(date):
        return None
    try:
        return datetime.strptime(date, RECEIPT_DATE_FORMAT)
    except ValueError:
        return None


def parse_purchase_time(time: str) -> Optional[datetime]:
    """ Parses a zero-padded 24-hour HH:MM time, returning None if it is malformed """
    if not isinstance(time, str) or not TIME_PATTERN.fullmatch(time):
        return None
    try:
        return datetime.strptime(time, RECEIPT_TIME_FORMAT)
    except ValueError:
        return None


def score_purchase_date(date: str) -> int:
    date_obj = parse_purchase_date(date)
    if date_obj is not None and date_obj.day % 2 != 0:
        return POINTS_ODD_PURCHASE_DAY
    return 0


def score_purchase_time(time: str) -> int:
    time_obj = parse_purchase_time(time)
    if time_obj is not None and time_obj.hour == REWARD_HOUR:
        return POINTS_VALID_PURCHASE_HOUR
    return 0


def calculate_points(receipt: Receipt) -> int:
    """
    Calculates the points earned by a receipt. Every rule is evaluated
    independently and a malformed field only zeroes the rules that read it,
    so this never raises for a decoded Receipt.
    """
    points = 0
    points += score_retailer(receipt.retailer)
    points += score_round_dollar(receipt.total)
    points += score_quarter_multiple(receipt.total)
    points += score_items(receipt.items)
    points += score_purchase_date(receipt.purchase_date)
    points += score_purchase_time(receipt.purchase_time)
    return points
