from __future__ import annotations
import math
from enum import Enum
from typing import Any, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    price: float = Field(ge=0)
    category: str
    description: str = ""
    image: str = ""  # absolute URL
    stock: int = Field(default=0, ge=0)
    rating: float = Field(default=0.0, ge=0, le=5)
    tags: Tuple[str, ...] = ()

class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    email: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    preferences: List[str] = Field(default_factory=list)

class CartItem(BaseModel):
    product: Product
    quantity: int = Field(default=1, ge=1)

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity

class ChatContext(BaseModel):
    """
    Cart/auth state the UI assembles for each chat message.
    cart_total and has_items are derived from cart_items when the caller leaves them out.
    """
    model_config = ConfigDict(populate_by_name=True)

    user: Optional[User] = None
    cart_items: List[CartItem] = Field(default_factory=list, alias="cartItems")
    cart_total: Optional[float] = Field(default=None, alias="cartTotal")
    has_items: Optional[bool] = Field(default=None, alias="hasItems")

    @model_validator(mode="after")
    def _fill_cart_state(self) -> "ChatContext":
        if self.cart_total is None:
            self.cart_total = round(sum(it.line_total for it in self.cart_items), 2)
        if self.has_items is None:
            self.has_items = len(self.cart_items) > 0
        return self

    @property
    def preferences(self) -> List[str]:
        return list(self.user.preferences) if self.user else []

class Intent(str, Enum):
    GREETING = "greeting"
    CART_HELP = "cart_help"
    RECOMMENDATIONS = "recommendations"
    ORDER_TRACKING = "order_tracking"
    SHIPPING = "shipping"
    RETURNS = "returns"
    PRODUCT_SEARCH = "product_search"
    PRICING = "pricing"
    SUPPORT = "support"
    CHECKOUT = "checkout"
    GENERAL = "general"

class ChatAction(BaseModel):
    label: str
    text: str

class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    actions: List[ChatAction] = Field(default_factory=list)
    quick_replies: List[str] = Field(default_factory=list, alias="quickReplies")
    intent: Optional[Intent] = None

def _lenient_float(x: Any) -> Optional[float]:
    if x is None or isinstance(x, bool):
        return None
    try:
        v = float(x)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(v) else v

class SearchFilters(BaseModel):
    """All fields optional; anything unparseable means 'no constraint'."""
    model_config = ConfigDict(populate_by_name=True)

    category: Optional[str] = None
    min_price: Optional[float] = Field(default=None, alias="minPrice")
    max_price: Optional[float] = Field(default=None, alias="maxPrice")

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category(cls, v: Any) -> Optional[str]:
        if v is None or not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def _coerce_price(cls, v: Any) -> Optional[float]:
        if isinstance(v, str) and not v.strip():
            return None
        return _lenient_float(v)

    def is_empty(self) -> bool:
        return self.category is None and self.min_price is None and self.max_price is None

class RecommendRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    preferences: List[str] = Field(default_factory=list)
    exclude_product_id: Optional[int] = Field(default=None, alias="excludeProductId")

class ChatRequest(BaseModel):
    message: str = ""
    context: ChatContext = Field(default_factory=ChatContext)

class WelcomeRequest(BaseModel):
    context: ChatContext = Field(default_factory=ChatContext)
