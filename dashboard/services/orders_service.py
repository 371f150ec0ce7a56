import logging
from datetime import datetime, timezone

from dashboard.core.errors import BackendError
from dashboard.models.schemas import Order, OrderCreate, OrderPatch
from dashboard.services.mappers import map_order
from dashboard.services.store import EntitySource, ListStore

logger = logging.getLogger(__name__)


class OrderSource(EntitySource):
    doc_type = "orders"
    label = "order"
    create_model = OrderCreate
    patch_model = OrderPatch
    order = (("created_at", True),)
    required_fields = (
        "full_name",
        "email",
        "phone",
        "address",
        "city",
        "postal_code",
        "country",
        "payment_method",
        "payment_status",
        "amount",
        "cart_items",
    )

    def product_index(self, docs):
        # one extra query resolves every line item's product in the batch
        product_ids = sorted({
            str(item["product_id"])
            for doc in docs
            for item in doc.get("cart_items") or []
            if item.get("product_id")
        })
        if not product_ids:
            return {}
        try:
            rows = self.backend.fetch("products", columns="id,name,image", ids=product_ids)
        except BackendError as e:
            # line items fall back to their copied name / the placeholder
            logger.warning("Could not resolve order products: %s", e)
            return {}
        return {str(row["id"]): row for row in rows}

    def hydrate(self, docs):
        products = self.product_index(docs)
        return [map_order(doc, products, self.backend.asset_url) for doc in docs]

    def new_document(self, data):
        data["status"] = "pending"
        if not data.get("created_at"):
            data["created_at"] = datetime.now(timezone.utc).isoformat()
        return data

    def to_form(self, record: Order):
        values = record.model_dump(mode="json", exclude={"id", "status", "created_at", "cart_items"})
        values["cart_items"] = [{"product_id": item.product_id, "quantity": item.quantity} for item in record.cart_items]
        return values


class OrderStore(ListStore):
    def __init__(self, backend):
        super().__init__(OrderSource(backend))

    def mark_completed(self, order_id: str) -> Order:
        """pending -> completed. There is no way back."""
        order = self.get(order_id)
        if order.status == "completed":
            return order
        updated = self.patch_fields(order_id, {"status": "completed"}, "Failed to mark order as completed")
        record = order.model_copy(update={"status": updated.get("status") or "completed"})
        self._replace(order_id, record)
        return record
