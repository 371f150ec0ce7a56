import logging
from typing import Dict, Optional

from dashboard.core.errors import BackendError, OperationFailed
from dashboard.models.schemas import Product, ProductCreate, ProductPatch
from dashboard.services.mappers import map_product
from dashboard.services.store import EntitySource, ListStore

logger = logging.getLogger(__name__)


class ProductSource(EntitySource):
    doc_type = "products"
    label = "product"
    create_model = ProductCreate
    patch_model = ProductPatch
    required_fields = ("name", "price", "stock_level", "category")
    form_defaults = {"category": "Chair"}

    def hydrate(self, docs):
        return [map_product(doc, self.backend.asset_url) for doc in docs]

    def to_form(self, record: Product):
        values = record.model_dump(mode="json", exclude={"id", "image_ref", "image_url"})
        if record.image_ref:
            values["image"] = record.image_ref
        return values

    def preview_url(self, record: Product) -> str:
        return record.image_url if record.image_ref else ""


class ProductStore(ListStore):
    def __init__(self, backend):
        super().__init__(ProductSource(backend))

    def upload_image(self, content: bytes, filename: Optional[str], content_type: str) -> Dict[str, str]:
        try:
            return self.source.backend.upload_asset(content, filename, content_type)
        except BackendError:
            logger.exception("Image upload failed for %s", filename)
            raise OperationFailed("Image upload failed")
