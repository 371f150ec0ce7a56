from dashboard.core.config import PLACEHOLDER_IMAGE
from dashboard.services.mappers import map_message, map_order, map_product, map_user


def asset_url(ref):
    return f"https://cdn/{ref}"


def test_product_image_resolves_to_public_url(products):
    product = map_product(products[0], asset_url)
    assert product.image_ref == "products/oak.png"
    assert product.image_url == "https://cdn/products/oak.png"


def test_product_without_image_gets_placeholder(products):
    assert map_product(products[1], asset_url).image_url == PLACEHOLDER_IMAGE


def test_numeric_ids_become_strings():
    assert map_message({"id": 42, "message": None}).id == "42"


def test_sparse_user_row():
    user = map_user({"id": "u9", "name": "Bare"})
    assert user.address.city == ""
    assert user.is_verified is False
    assert user.role == "user"


def test_order_line_items_expand_one_level(orders, products):
    index = {p["id"]: p for p in products}
    order = map_order(orders[0], index, asset_url)
    item = order.cart_items[0]
    assert item.product.id == "p1"
    assert item.product.name == "Oak Chair"
    assert item.product.image_url == "https://cdn/products/oak.png"


def test_order_line_item_falls_back_to_copied_name(orders):
    doc = dict(orders[0], cart_items=[{"product_id": "gone", "quantity": 1, "name": "Old Stool"}])
    item = map_order(doc, {}, asset_url).cart_items[0]
    assert item.product.name == "Old Stool"
    assert item.product.image_url == PLACEHOLDER_IMAGE
