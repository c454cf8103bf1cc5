# storeadmin/models.py

import enum
from sqlalchemy import (
    Column, Integer, String, Boolean, DECIMAL, DateTime, Text,
    ForeignKey, Enum, CheckConstraint
)
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

# --- ENUMS ---

class ProductSource(str, enum.Enum):
    MANUAL = "manual"
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"
    DEAL = "deal"
    EXTERNAL = "external"

class BannerType(str, enum.Enum):
    HERO = "HERO"
    SIDEBAR = "SIDEBAR"
    PRODUCT = "PRODUCT"
    SPECIAL_DEALS = "SPECIAL_DEALS"

class BannerStatus(str, enum.Enum):
    SCHEDULED = "SCHEDULED"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"

class DealStatus(str, enum.Enum):
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"

class DiscountType(str, enum.Enum):
    PERCENTAGE = "PERCENTAGE"
    FLAT = "FLAT"

class InventoryStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    OUT_OF_STOCK = "OUT_OF_STOCK"
    LOW_STOCK = "LOW_STOCK"

class PromoType(str, enum.Enum):
    LINE_TOTAL = "LINE_TOTAL"   # Desconto sobre o subtotal dos itens
    SHIPPING = "SHIPPING"       # Desconto sobre o frete

class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"

# Status de estoque que podem aparecer nas vitrines (banners e seções da home)
DISPLAYABLE_STATUSES = (InventoryStatus.AVAILABLE, InventoryStatus.LOW_STOCK)

# No máximo um dos alvos de fonte de produtos pode estar preenchido por linha.
SINGLE_SOURCE_SQL = (
    "(CASE WHEN selected_category_id IS NOT NULL THEN 1 ELSE 0 END"
    " + CASE WHEN selected_subcategory_id IS NOT NULL THEN 1 ELSE 0 END"
    " + CASE WHEN selected_deal_id IS NOT NULL THEN 1 ELSE 0 END"
    " + CASE WHEN external_link IS NOT NULL THEN 1 ELSE 0 END) <= 1"
)

# --- CATÁLOGO ---

class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, index=True, nullable=False)
    image = Column(String(1024))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    subcategories = relationship("Subcategory", back_populates="category", order_by="Subcategory.id")

class Subcategory(Base):
    __tablename__ = "subcategories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, index=True, nullable=False)
    image = Column(String(1024))
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="subcategories")
    products = relationship("Product", back_populates="subcategory")

class Deal(Base):
    __tablename__ = "deals"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, index=True, nullable=False)
    discount_percentage = Column(DECIMAL(5, 2), nullable=False)
    status = Column(Enum(DealStatus), nullable=False, default=DealStatus.DISABLED)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    products = relationship("Product", back_populates="deal")

class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    base_price = Column(DECIMAL(10, 2), nullable=False)
    discount = Column(DECIMAL(10, 2), nullable=False, default=0)
    discount_type = Column(Enum(DiscountType), nullable=False, default=DiscountType.PERCENTAGE)
    # Preço final é derivado de base_price, discount e da oferta; nunca é editado diretamente.
    final_price = Column(DECIMAL(10, 2))
    stock = Column(Integer, nullable=False, default=0)
    status = Column(Enum(InventoryStatus), nullable=False, default=InventoryStatus.AVAILABLE)
    subcategory_id = Column(Integer, ForeignKey("subcategories.id"), nullable=False, index=True)
    deal_id = Column(Integer, ForeignKey("deals.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    subcategory = relationship("Subcategory", back_populates="products")
    deal = relationship("Deal", back_populates="products")
    order_items = relationship("OrderItem", back_populates="product")

    # Apagar um produto remove apenas os vínculos com as vitrines
    banner_links = relationship("BannerProduct", back_populates="product", cascade="all, delete-orphan")
    section_links = relationship("SectionProduct", back_populates="product", cascade="all, delete-orphan")

# --- VITRINES (BANNERS E SEÇÕES DA HOME) ---

class BannerProduct(Base):
    """Vínculo ordenado entre banner e produto. Aceita o mesmo produto mais de uma vez."""
    __tablename__ = "banner_products"

    id = Column(Integer, primary_key=True)
    banner_id = Column(Integer, ForeignKey("banners.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)

    banner = relationship("Banner", back_populates="product_links")
    product = relationship("Product", back_populates="banner_links")

class Banner(Base):
    __tablename__ = "banners"
    __table_args__ = (
        CheckConstraint(SINGLE_SOURCE_SQL, name="ck_banners_single_source"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, index=True, nullable=False)
    type = Column(Enum(BannerType), nullable=False)
    status = Column(Enum(BannerStatus), nullable=False, default=BannerStatus.SCHEDULED, index=True)
    # Datas gravadas em UTC, sem fuso
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    desktop_image = Column(String(1024))
    mobile_image = Column(String(1024))

    product_source = Column(Enum(ProductSource), nullable=False)
    selected_category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    selected_subcategory_id = Column(Integer, ForeignKey("subcategories.id"), nullable=True)
    selected_deal_id = Column(Integer, ForeignKey("deals.id"), nullable=True)
    external_link = Column(String(2048), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    product_links = relationship(
        "BannerProduct",
        back_populates="banner",
        order_by="BannerProduct.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )
    products = association_proxy(
        "product_links", "product", creator=lambda product: BannerProduct(product=product)
    )

    selected_category = relationship("Category")
    selected_subcategory = relationship("Subcategory")
    selected_deal = relationship("Deal")

    @property
    def product_ids(self) -> list[int]:
        return [link.product_id for link in self.product_links]

class SectionProduct(Base):
    """Vínculo ordenado entre seção da home e produto."""
    __tablename__ = "homepage_section_products"

    id = Column(Integer, primary_key=True)
    section_id = Column(Integer, ForeignKey("homepage_sections.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)

    section = relationship("HomePageSection", back_populates="product_links")
    product = relationship("Product", back_populates="section_links")

class HomePageSection(Base):
    __tablename__ = "homepage_sections"
    __table_args__ = (
        CheckConstraint(SINGLE_SOURCE_SQL, name="ck_homepage_sections_single_source"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), unique=True, index=True, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    product_source = Column(Enum(ProductSource), nullable=False)
    selected_category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    selected_subcategory_id = Column(Integer, ForeignKey("subcategories.id"), nullable=True)
    selected_deal_id = Column(Integer, ForeignKey("deals.id"), nullable=True)
    external_link = Column(String(2048), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    product_links = relationship(
        "SectionProduct",
        back_populates="section",
        order_by="SectionProduct.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )
    products = association_proxy(
        "product_links", "product", creator=lambda product: SectionProduct(product=product)
    )

    selected_category = relationship("Category")
    selected_subcategory = relationship("Subcategory")
    selected_deal = relationship("Deal")

    @property
    def product_ids(self) -> list[int]:
        return [link.product_id for link in self.product_links]

# --- PROMOÇÕES E PEDIDOS ---

class Promo(Base):
    __tablename__ = "promos"

    id = Column(Integer, primary_key=True, index=True)
    promo_code = Column(String(100), unique=True, index=True, nullable=False)
    discount_percentage = Column(Integer, nullable=False)
    apply_on = Column(Enum(PromoType), nullable=False, default=PromoType.LINE_TOTAL)
    is_valid = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_email = Column(String(255), nullable=False, index=True)
    status = Column(Enum(OrderStatus), nullable=False, default=OrderStatus.PENDING)
    subtotal = Column(DECIMAL(10, 2), nullable=False)
    shipping_fee = Column(DECIMAL(10, 2), nullable=False)
    discount_amount = Column(DECIMAL(10, 2), nullable=False, default=0)
    total_price = Column(DECIMAL(10, 2), nullable=False)
    applied_promo_code = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")

class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price_at_purchase = Column(DECIMAL(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")
    product = relationship("Product", back_populates="order_items")
