from datetime import datetime
from decimal import Decimal
from typing import Annotated, ClassVar, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .models import (
    BannerStatus, BannerType, DealStatus, DiscountType, InventoryStatus,
    OrderStatus, ProductSource, PromoType,
)

# --- Seletor de fonte de produtos ---
# União discriminada pelo campo "type": só existe uma variante ativa por vez.

class ManualSource(BaseModel):
    type: Literal["manual"] = "manual"
    product_ids: List[int] = Field(..., min_length=1)

class CategorySource(BaseModel):
    type: Literal["category"] = "category"
    category_id: int

class SubcategorySource(BaseModel):
    type: Literal["subcategory"] = "subcategory"
    subcategory_id: int
    # Obrigatório nas seções da home, opcional nos banners
    category_id: Optional[int] = None

class DealSource(BaseModel):
    type: Literal["deal"] = "deal"
    deal_id: int

class ExternalSource(BaseModel):
    type: Literal["external"] = "external"
    external_link: str = Field(..., min_length=1)

SourceSelector = Annotated[
    Union[ManualSource, CategorySource, SubcategorySource, DealSource, ExternalSource],
    Field(discriminator="type"),
]

class DisplaySourceResponse(BaseModel):
    """Campos de fonte persistidos em banners e seções da home."""
    product_source: ProductSource
    product_ids: List[int] = []
    selected_category_id: Optional[int] = None
    selected_subcategory_id: Optional[int] = None
    selected_deal_id: Optional[int] = None
    external_link: Optional[str] = None

# --- Updates parciais ---

class PartialUpdate(BaseModel):
    """
    Base dos updates parciais. Campo omitido fica como está; null explícito
    só é aceito nos campos cuja coluna admite nulo.
    """
    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def reject_nulls(cls, data):
        if isinstance(data, dict):
            for name in cls.non_nullable:
                if name in data and data[name] is None:
                    raise ValueError(f"{name} cannot be null")
        return data

# --- Categorias ---

class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    image: Optional[str] = None

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(PartialUpdate):
    non_nullable = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    image: Optional[str] = None

class Category(CategoryBase):
    id: int

    model_config = ConfigDict(from_attributes=True)

class SubcategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    image: Optional[str] = None

class SubcategoryCreate(SubcategoryBase):
    pass

class SubcategoryUpdate(PartialUpdate):
    non_nullable = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    image: Optional[str] = None

class Subcategory(SubcategoryBase):
    id: int
    category_id: int

    model_config = ConfigDict(from_attributes=True)

class CategoryWithSubcategories(Category):
    subcategories: List[Subcategory] = []

# --- Ofertas (deals) ---

class DealBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    discount_percentage: Decimal = Field(..., ge=1, le=100)
    status: DealStatus = DealStatus.DISABLED

class DealCreate(DealBase):
    pass

class DealUpdate(PartialUpdate):
    non_nullable = ("name", "discount_percentage", "status")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    discount_percentage: Optional[Decimal] = Field(None, ge=1, le=100)
    status: Optional[DealStatus] = None

class Deal(DealBase):
    id: int

    model_config = ConfigDict(from_attributes=True)

class DealWithCount(Deal):
    product_count: int = 0

# --- Produtos ---

class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    base_price: Decimal = Field(..., ge=0)
    discount: Decimal = Field(Decimal("0"), ge=0)
    discount_type: DiscountType = DiscountType.PERCENTAGE
    stock: int = Field(0, ge=0)
    status: InventoryStatus = InventoryStatus.AVAILABLE

class ProductCreate(ProductBase):
    subcategory_id: int
    # Quando informado, a subcategoria precisa pertencer a esta categoria
    category_id: Optional[int] = None
    deal_id: Optional[int] = None

class ProductUpdate(PartialUpdate):
    # deal_id null desvincula a oferta
    non_nullable = (
        "name", "base_price", "discount", "discount_type", "stock", "status", "subcategory_id",
    )

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    base_price: Optional[Decimal] = Field(None, ge=0)
    discount: Optional[Decimal] = Field(None, ge=0)
    discount_type: Optional[DiscountType] = None
    stock: Optional[int] = Field(None, ge=0)
    status: Optional[InventoryStatus] = None
    subcategory_id: Optional[int] = None
    deal_id: Optional[int] = None

class Product(ProductBase):
    id: int
    final_price: Optional[Decimal] = None
    subcategory_id: int
    deal_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

# --- Banners ---

class BannerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: BannerType
    start_date: datetime
    end_date: datetime
    desktop_image: Optional[str] = None
    mobile_image: Optional[str] = None

class BannerCreate(BannerBase):
    source: SourceSelector

class BannerUpdate(PartialUpdate):
    non_nullable = ("name", "type", "start_date", "end_date", "source")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[BannerType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    desktop_image: Optional[str] = None
    mobile_image: Optional[str] = None
    source: Optional[SourceSelector] = None

class Banner(BannerBase, DisplaySourceResponse):
    id: int
    status: BannerStatus

    model_config = ConfigDict(from_attributes=True)

# --- Seções da home ---

class HomePageSectionCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    is_active: bool = True
    source: SourceSelector

class HomePageSectionUpdate(PartialUpdate):
    non_nullable = ("title", "is_active", "source")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    is_active: Optional[bool] = None
    source: Optional[SourceSelector] = None

class HomePageSection(DisplaySourceResponse):
    id: int
    title: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)

# --- Cupons (promos) ---

class PromoCreate(BaseModel):
    promo_code: str = Field(..., min_length=1, max_length=100)
    discount_percentage: int = Field(..., ge=1, le=100)
    apply_on: PromoType = PromoType.LINE_TOTAL
    is_valid: bool = True

class Promo(PromoCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)

# --- Pedidos ---

class OrderItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(..., gt=0)

class CheckoutRequest(BaseModel):
    customer_email: str = Field(..., min_length=3, max_length=255)
    items: List[OrderItemCreate] = Field(..., min_length=1)
    promo_code: Optional[str] = None

class OrderItemResponse(BaseModel):
    product_id: int
    quantity: int
    price_at_purchase: Decimal

    model_config = ConfigDict(from_attributes=True)

class OrderResponse(BaseModel):
    id: int
    customer_email: str
    status: OrderStatus
    subtotal: Decimal
    shipping_fee: Decimal
    discount_amount: Decimal
    total_price: Decimal
    applied_promo_code: Optional[str] = None
    created_at: Optional[datetime] = None
    items: List[OrderItemResponse] = []

    model_config = ConfigDict(from_attributes=True)
