from .crud_category import category
from .crud_subcategory import subcategory
from .crud_deal import deal
from .crud_product import product
from .crud_banner import banner
from .crud_homepage import homepage_section
from .crud_promo import promo
from . import crud_order
