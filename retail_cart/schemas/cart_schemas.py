from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional


Unit = Literal["kg", "g", "unit", "package"]
ItemType = Literal["additional", "package"]


class CamelModel(BaseModel):
    """Accepts the backend's camelCase keys as well as snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Raw payload returned by GET /product/cart

class PackageLine(CamelModel):
    id: Optional[int] = None
    name: str
    quantity: float = 0
    has_special_badge: bool = False


class Package(CamelModel):
    id: int
    cart_item_id: Optional[int] = None
    package_name: str = ""
    total_items: int = 0
    price: float = 0
    quantity: float = 1
    image: Optional[str] = None
    description: Optional[str] = None
    items: List[PackageLine] = []


class RawCartItem(CamelModel):
    id: int
    cart_item_id: Optional[int] = None
    name: str = ""
    unit: Unit = "kg"
    quantity: float = 0
    discount: Optional[float] = 0
    price: float = 0
    normal_price: Optional[float] = None
    discounted_price: Optional[float] = None
    image: Optional[str] = None
    variety_name_english: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[str] = None


class AdditionalItemGroup(CamelModel):
    id: Optional[int] = None
    package_name: str = ""
    # the backend capitalises this key
    items: List[RawCartItem] = Field(default_factory=list, alias="Items")


class CartSummary(CamelModel):
    total_packages: int = 0
    total_products: int = 0
    package_total: float = 0
    product_total: float = 0
    grand_total: float = 0
    total_items: int = 0
    coupon_discount: float = 0
    final_total: float = 0


class CartHeader(CamelModel):
    cart_id: int
    user_id: Optional[int] = None
    buyer_type: Optional[str] = None
    is_coupon: int = 0
    coupon_value: Optional[str] = None
    created_at: Optional[str] = None


class CartData(CamelModel):
    cart: Optional[CartHeader] = None
    packages: List[Package] = []
    additional_items: List[AdditionalItemGroup] = []
    summary: Optional[CartSummary] = None


# Derived view

class UnifiedItem(CamelModel):
    id: int
    cart_item_id: Optional[int] = None
    product_id: Optional[int] = None    # additional items
    mp_item_id: Optional[int] = None    # package items
    name: str = ""
    display_name: Optional[str] = None
    item_type: ItemType
    unit: Unit
    quantity: float
    unit_price: float
    total_price: float
    total_discount: float = 0
    original_price: float
    discounted_price: Optional[float] = None
    normal_price: Optional[float] = None
    package_id: Optional[int] = None
    package_name: Optional[str] = None
    image: Optional[str] = None
    variety_name_english: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[str] = None
    has_special_badge: bool = False


class CartState(CamelModel):
    cart_id: int = 0
    cart: Optional[CartHeader] = None
    packages: List[Package] = []
    additional_items: List[AdditionalItemGroup] = []
    summary: Optional[CartSummary] = None
    items: List[UnifiedItem] = []


# Request bodies for the local cart routes

class CartQuantityUpdateRequest(BaseModel):
    quantity: float
    item_type: ItemType = "additional"
    # apply locally now, push upstream on the next sync
    defer: bool = False


class CartBulkDeleteRequest(BaseModel):
    item_ids: List[int]


class CartSummaryPatch(CamelModel):
    total_packages: Optional[int] = None
    total_products: Optional[int] = None
    package_total: Optional[float] = None
    product_total: Optional[float] = None
    grand_total: Optional[float] = None
    total_items: Optional[int] = None
    coupon_discount: Optional[float] = None
    final_total: Optional[float] = None
