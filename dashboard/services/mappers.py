"""Raw backend rows -> view models.

Pure functions. Anything that needs the network (the product index for
orders) is fetched by the caller and passed in.
"""
from typing import Any, Callable, Dict, Mapping, Optional

from dashboard.core.config import PLACEHOLDER_IMAGE
from dashboard.models.schemas import Address, LineItem, Message, Order, Product, ProductRef, User

AssetUrl = Callable[[str], str]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def image_url(ref: Optional[str], asset_url: AssetUrl) -> str:
    return asset_url(ref) if ref else PLACEHOLDER_IMAGE


def map_message(doc: Dict[str, Any]) -> Message:
    return Message(
        id=str(doc["id"]),
        name=_text(doc.get("name")),
        email=_text(doc.get("email")),
        body=_text(doc.get("message")),
        created_at=doc.get("created_at"),
        pinned=bool(doc.get("pinned")),
    )


def map_user(doc: Dict[str, Any]) -> User:
    address = doc.get("address") or {}
    return User(
        id=str(doc["id"]),
        name=_text(doc.get("name")),
        email=_text(doc.get("email")),
        mobile_number=_text(doc.get("mobile_number")),
        password=_text(doc.get("password")),
        address=Address(**{k: _text(address.get(k)) for k in Address.model_fields}),
        is_verified=bool(doc.get("is_verified")),
        role=doc.get("role") or "user",
    )


def map_product(doc: Dict[str, Any], asset_url: AssetUrl) -> Product:
    ref = doc.get("image") or None
    return Product(
        id=str(doc["id"]),
        name=_text(doc.get("name")),
        image_ref=ref,
        image_url=image_url(ref, asset_url),
        price=doc.get("price") or 0,
        description=_text(doc.get("description")),
        discount_percentage=doc.get("discount_percentage") or 0,
        is_featured_product=bool(doc.get("is_featured_product")),
        stock_level=doc.get("stock_level") or 0,
        category=doc.get("category") or "Chair",
    )


def map_line_item(item: Dict[str, Any], products: Mapping[str, Dict[str, Any]], asset_url: AssetUrl) -> LineItem:
    product_id = _text(item.get("product_id"))
    product = products.get(product_id)
    if product is not None:
        ref = ProductRef(id=product_id, name=_text(product.get("name")), image_url=image_url(product.get("image"), asset_url))
    elif item.get("name"):
        # product gone, fall back to the name/image copied onto the order
        ref = ProductRef(id=product_id, name=_text(item.get("name")), image_url=item.get("image_url") or PLACEHOLDER_IMAGE)
    else:
        ref = None
    return LineItem(product_id=product_id, quantity=item.get("quantity") or 1, product=ref)


def map_order(doc: Dict[str, Any], products: Mapping[str, Dict[str, Any]], asset_url: AssetUrl) -> Order:
    return Order(
        id=str(doc["id"]),
        full_name=_text(doc.get("full_name")),
        email=_text(doc.get("email")),
        phone=_text(doc.get("phone")),
        address=_text(doc.get("address")),
        city=_text(doc.get("city")),
        postal_code=_text(doc.get("postal_code")),
        country=_text(doc.get("country")),
        payment_method=_text(doc.get("payment_method")),
        payment_status=_text(doc.get("payment_status")),
        amount=doc.get("amount") or 0,
        created_at=doc.get("created_at"),
        status=doc.get("status") or "pending",
        cart_items=[map_line_item(item, products, asset_url) for item in doc.get("cart_items") or []],
    )
