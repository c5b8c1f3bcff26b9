from __future__ import annotations

from dataclasses import asdict, replace
from typing import Optional

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import optional_date_to_timestamp
from ..common.web import current_role, handle_domain_errors, json_body, login_required
from ..core.constants import INVENTORY_LOCATIONS
from ..core.enums import InventoryOrderStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .model import InventoryLine


def _parse_order_status(value: str) -> InventoryOrderStatus:
    try:
        return InventoryOrderStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown order status: {value!r}")


def _int_field(data: dict, key: str, default: int = 0) -> int:
    try:
        return int(data.get(key) or default)
    except (TypeError, ValueError):
        raise ValidationError(f"{key.replace('_', ' ').capitalize()} must be a whole number")


def _price(value) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError("Price must be a number")


def _line_json(line: InventoryLine) -> dict:
    return {
        **asdict(line.item),
        "is_low_stock": line.item.is_low_stock,
        "expiry_status": line.expiry.value if line.expiry else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/inventory", methods=["GET"], endpoint="inventory_list")
    @login_required
    @handle_domain_errors
    def inventory_list():
        location = request.args.get("location") or None
        category = request.args.get("category") or None
        lines = container.inventory_service.lines(location=location, category=category)
        payload = {"success": True, "locations": list(INVENTORY_LOCATIONS), "items": [_line_json(x) for x in lines]}
        if location:
            payload["categories"] = container.inventory_service.categories(location)
        return jsonify(payload)

    @app.route("/api/inventory/attention", methods=["GET"], endpoint="inventory_attention")
    @login_required
    @handle_domain_errors
    def inventory_attention():
        lines = container.inventory_service.needing_attention(location=request.args.get("location") or None)
        return jsonify({"success": True, "items": [_line_json(x) for x in lines]})

    @app.route("/api/inventory", methods=["POST"], endpoint="add_inventory_item")
    @login_required
    @handle_domain_errors
    def add_inventory_item():
        data = json_body()
        item_id = container.inventory_service.add(
            current_role=current_role(),
            name=data.get("name", ""),
            location=data.get("location", ""),
            category=data.get("category", ""),
            supplier=data.get("supplier", ""),
            order_frequency=data.get("order_frequency", ""),
            current_stock_count=_int_field(data, "current_stock_count"),
            minimum_stock_level=_int_field(data, "minimum_stock_level"),
            order_status=_parse_order_status(data.get("order_status") or InventoryOrderStatus.OK.value),
            expiry_date=data.get("expiry_date"),
            expected_delivery_date=data.get("expected_delivery_date"),
            price=_price(data.get("price")),
            size=data.get("size"),
        )
        return jsonify({"success": True, "id": item_id}), 201

    @app.route("/api/inventory/<item_id>", methods=["PUT"], endpoint="update_inventory_item")
    @login_required
    @handle_domain_errors
    def update_inventory_item(item_id: str):
        data = json_body()
        existing = container.inventory_service.get(item_id)

        changes: dict = {}
        for key in ("name", "location", "category", "supplier", "order_frequency"):
            if key in data:
                changes[key] = str(data[key] or "").strip()
        for key in ("current_stock_count", "minimum_stock_level"):
            if key in data:
                changes[key] = _int_field(data, key)
        if "order_status" in data:
            changes["order_status"] = _parse_order_status(data["order_status"])
        for key in ("expiry_date", "expected_delivery_date"):
            if key in data:
                changes[key] = optional_date_to_timestamp(data[key])
        if "price" in data:
            changes["price"] = _price(data["price"])
        if "size" in data:
            changes["size"] = (data["size"] or "").strip() or None

        container.inventory_service.update(current_role=current_role(), item=replace(existing, **changes))
        return jsonify({"success": True})

    @app.route("/api/inventory/<item_id>/stocktake", methods=["POST"], endpoint="inventory_stocktake")
    @login_required
    @handle_domain_errors
    def inventory_stocktake(item_id: str):
        data = json_body()
        if data.get("count") in (None, ""):
            raise ValidationError("Count is required")
        item = container.inventory_service.record_stocktake(
            current_role=current_role(),
            item_id=item_id,
            count=_int_field(data, "count"),
            checked_by=data.get("checked_by") or session.get("name", ""),
        )
        return jsonify({"success": True, "is_low_stock": item.is_low_stock})
