from datetime import datetime
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, EmailStr, Field

Category = Literal["Chair", "Sofa"]
Role = Literal["user", "admin"]


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _blank_to_zero(value: Any) -> Any:
    value = _blank_to_none(value)
    return 0 if value is None else value


# html forms post "" for untouched number inputs
OptionalNumber = Annotated[Optional[float], BeforeValidator(_blank_to_none)]
OptionalCount = Annotated[Optional[int], BeforeValidator(_blank_to_none)]


def parse_cart_items(value: Any) -> Any:
    """Accept "p1, p2:3" (product ids, optional :quantity) as well as a list."""
    if not isinstance(value, str):
        return value
    items = []
    for chunk in value.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        product_id, _, quantity = chunk.partition(":")
        items.append({"product_id": product_id.strip(), "quantity": int(quantity) if quantity.strip() else 1})
    return items


# ---------- view models ----------

class Message(BaseModel):
    id: str
    name: str = ""
    email: str = ""
    body: str = ""
    created_at: Optional[datetime] = None
    pinned: bool = False


class Address(BaseModel):
    street: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    postal_code: str = ""


class User(BaseModel):
    id: str
    name: str = ""
    email: str = ""
    mobile_number: str = ""
    password: str = ""  # plaintext, as stored by the storefront
    address: Address = Field(default_factory=Address)
    is_verified: bool = False
    role: str = "user"


class ProductRef(BaseModel):
    id: str
    name: str = ""
    image_url: str


class LineItem(BaseModel):
    product_id: str
    quantity: int = 1
    product: Optional[ProductRef] = None


class Order(BaseModel):
    id: str
    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    country: str = ""
    payment_method: str = ""
    payment_status: str = ""
    amount: float = 0
    created_at: Optional[datetime] = None
    status: str = "pending"
    cart_items: List[LineItem] = Field(default_factory=list)


class Product(BaseModel):
    id: str
    name: str = ""
    image_ref: Optional[str] = None
    image_url: str
    price: float = 0
    description: str = ""
    discount_percentage: float = 0
    is_featured_product: bool = False
    stock_level: int = 0
    category: str = "Chair"


# ---------- create / patch requests ----------

class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    image: Optional[str] = Field(None, description="Storage object path")
    price: float = Field(..., ge=0)
    description: str = ""
    discount_percentage: Annotated[float, BeforeValidator(_blank_to_zero)] = Field(0, ge=0, le=100)
    is_featured_product: bool = False
    stock_level: int = Field(..., ge=0)
    category: Category = "Chair"


class ProductPatch(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = None
    price: OptionalNumber = Field(None, ge=0)
    description: Optional[str] = None
    discount_percentage: OptionalNumber = Field(None, ge=0, le=100)
    is_featured_product: Optional[bool] = None
    stock_level: OptionalCount = Field(None, ge=0)
    category: Optional[Category] = None


class AddressIn(BaseModel):
    street: str
    city: str
    state: str
    country: str
    postal_code: str


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    mobile_number: str
    password: str
    address: AddressIn
    is_verified: bool = False
    role: Role = "user"


class UserPatch(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    mobile_number: Optional[str] = None
    password: Optional[str] = None
    address: Optional[AddressIn] = None
    is_verified: Optional[bool] = None
    role: Optional[Role] = None


class LineItemIn(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


CartItems = Annotated[List[LineItemIn], BeforeValidator(parse_cart_items)]


class OrderCreate(BaseModel):
    full_name: str
    email: EmailStr
    phone: str
    address: str
    city: str
    postal_code: str
    country: str
    payment_method: str
    payment_status: str
    amount: float = Field(..., ge=0)
    cart_items: CartItems = Field(..., min_length=1)
    created_at: Optional[datetime] = None


class OrderPatch(BaseModel):
    # no status here, completion goes through OrderStore.mark_completed
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    amount: OptionalNumber = Field(None, ge=0)
    cart_items: Optional[CartItems] = None


class MessagePatch(BaseModel):
    pinned: Optional[bool] = None


# ---------- http bodies ----------

class AdminLogin(BaseModel):
    email: EmailStr


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class PinToggle(BaseModel):
    current: Optional[bool] = None


class FormChanges(BaseModel):
    fields: dict = Field(default_factory=dict, description="Field name (dotted for nested) to new value")
