import logging
import re
from typing import Callable, Mapping, Optional
from uuid import uuid4

from flask import Flask, jsonify, request

import config
from models import Receipt
from points import calculate_points, parse_purchase_date, parse_purchase_time
from store import InMemoryReceiptStore, ReceiptStore

logger = logging.getLogger(__name__)

MONEY_PATTERN = r"^\d+\.\d{2}$"
DESCRIPTION_PATTERN = r"^[\w\s\-]+$"


def generate_receipt_id() -> str:
    return str(uuid4())


def validate_retailer_name(retailer_name: str):
    """ Validates if retailer name contains at least 1 non-whitespace character """
    if not re.search(r"\S", retailer_name):
        raise ValueError(f"Error: invalid receipt retailer name ({retailer_name})")


def validate_total(total: str):
    """ Validates receipt total amount """
    if not re.match(MONEY_PATTERN, total):
        raise ValueError(f"Error: invalid receipt total ({total})")


def validate_item(description: str, price: str):
    """ Validates both the item description and item price formats """
    if not re.match(DESCRIPTION_PATTERN, description):
        raise ValueError(f"Error: invalid item description ({description})")
    if not re.match(MONEY_PATTERN, price):
        raise ValueError(f"Error: invalid item price ({price})")


def validate_date_time(date: str, time: str):
    """ Validates zero-padded date and time formats """
    if parse_purchase_date(date) is None:
        raise ValueError(f"Error: invalid receipt purchase date ({date})")
    if parse_purchase_time(time) is None:
        raise ValueError(f"Error: invalid receipt purchase time ({time})")


def validate_receipt_formats(receipt: Receipt):
    """ Strict mode: rejects field values the scoring rules would otherwise treat as zero """
    validate_retailer_name(receipt.retailer)
    validate_total(receipt.total)
    if len(receipt.items) < 1:
        raise ValueError("Error: receipt items list is empty")
    for item in receipt.items:
        validate_item(item.short_description, item.price)
    validate_date_time(receipt.purchase_date, receipt.purchase_time)


def create_app(store: Optional[ReceiptStore] = None,
               generate_id: Callable[[], str] = generate_receipt_id,
               config_overrides: Optional[Mapping] = None) -> Flask:
    """ Builds the Flask app around an injected receipt store and id generator """
    app = Flask(__name__)
    app.config["STRICT_VALIDATION"] = config.STRICT_VALIDATION
    if config_overrides:
        app.config.update(config_overrides)
    receipts = store if store is not None else InMemoryReceiptStore()

    @app.route('/receipts/process', methods=['POST'])
    def process_receipt():
        """
        Router for receipt processing requests, which first generates a unique id for
        each receipt. The input JSON is decoded into a Receipt (and, in strict mode,
        its field formats are validated) and points are calculated for the receipt.
        The score is saved in the receipt store and the id is returned to the user.

        Returns:
            400 Error if input JSON is invalid
            200 OK and generated receipt id if input JSON is valid
        """
        payload = request.get_json(silent=True)
        try:
            receipt = Receipt.from_json(payload)
            if app.config["STRICT_VALIDATION"]:
                validate_receipt_formats(receipt)
        except ValueError as e:
            logger.warning("Rejected receipt: %s", e)
            return jsonify({"error": str(e)}), 400

        receipt_id = generate_id()
        points = calculate_points(receipt)
        receipts.put(receipt_id, points)
        logger.info("Processed receipt %s for %d points", receipt_id, points)
        return jsonify({"id": receipt_id})

    @app.route('/receipts/<receipt_id>/points', methods=['GET'])
    def get_points(receipt_id):
        """
        Router for points lookups. The input receipt id is used to look up
        its score in the receipt store.

        Returns:
            404 Error if the receipt id is not found
            200 OK and the calculated points for the receipt if receipt id is present
        """
        points = receipts.get(receipt_id)
        if points is None:
            logger.info("Receipt id not found: %s", receipt_id)
            return jsonify({"error": f"ERROR: receipt id not found ({receipt_id})"}), 404
        return jsonify({"points": points})

    return app


flask_app = create_app()


if __name__ == '__main__':
    config.setup_logging()
    flask_app.run(host=config.HOST, port=config.PORT, threaded=True)
    # threaded=True lets Flask handle requests concurrently; the store guards its own map
