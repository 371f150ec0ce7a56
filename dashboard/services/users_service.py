from dashboard.models.schemas import UserCreate, UserPatch
from dashboard.services.mappers import map_user
from dashboard.services.store import EntitySource, ListStore


class UserSource(EntitySource):
    doc_type = "users"
    label = "user"
    create_model = UserCreate
    patch_model = UserPatch
    required_fields = (
        "name",
        "email",
        "mobile_number",
        "password",
        "address.street",
        "address.city",
        "address.state",
        "address.country",
        "address.postal_code",
    )
    form_defaults = {"role": "user", "is_verified": False, "address": {}}

    def hydrate(self, docs):
        return [map_user(doc) for doc in docs]


class UserStore(ListStore):
    def __init__(self, backend):
        super().__init__(UserSource(backend))
