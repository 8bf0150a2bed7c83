from dataclasses import dataclass
from typing import Tuple

required_receipt_attributes = ["retailer", "total", "items", "purchaseDate", "purchaseTime"]
required_item_attributes = ["shortDescription", "price"]


class ReceiptFormatError(ValueError):
    """ Raised when a receipt payload does not have the expected JSON shape """


@dataclass(frozen=True)
class Item:
    short_description: str
    price: str

    @classmethod
    def from_json(cls, item) -> "Item":
        """ Builds an item from its JSON object, checking attribute presence and types """
        if not isinstance(item, dict):
            raise ReceiptFormatError("Error: invalid receipt item format")
        for attribute in required_item_attributes:
            if not isinstance(item.get(attribute), str):
                raise ReceiptFormatError("Error: invalid receipt item format")
        return cls(short_description=item["shortDescription"], price=item["price"])


@dataclass(frozen=True)
class Receipt:
    retailer: str
    purchase_date: str
    purchase_time: str
    items: Tuple[Item, ...]
    total: str

    @classmethod
    def from_json(cls, receipt) -> "Receipt":
        """
        Builds a receipt from the decoded request body. Only the shape is checked
        here: values that are strings but badly formatted are left to the caller.
        """
        if not isinstance(receipt, dict):
            raise ReceiptFormatError("Error: invalid receipt json")
        for attribute in required_receipt_attributes:
            if attribute not in receipt:
                raise ReceiptFormatError(f"Error: missing {attribute} in receipt")
            if attribute != "items" and not isinstance(receipt[attribute], str):
                raise ReceiptFormatError(f"Error: invalid {attribute} format")

        if not isinstance(receipt["items"], list):
            raise ReceiptFormatError("Error: invalid receipt items list format")
        items = tuple(Item.from_json(item) for item in receipt["items"])

        return cls(
            retailer=receipt["retailer"],
            purchase_date=receipt["purchaseDate"],
            purchase_time=receipt["purchaseTime"],
            items=items,
            total=receipt["total"],
        )
