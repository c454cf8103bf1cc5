# storeadmin/services/category_service.py

import logging

from sqlalchemy.orm import Session

from .. import models, schemas, crud
from .errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

class CategoryService:
    """Categorias e subcategorias do catálogo."""

    def __init__(self, db: Session):
        self.db = db

    def _is_selected_by_display(self, **target) -> bool:
        return crud.banner.is_referenced(self.db, **target) or crud.homepage_section.is_referenced(
            self.db, **target
        )

    # --- Categorias ---

    def get_category(self, category_id: int) -> models.Category:
        category = crud.category.get(self.db, category_id)
        if category is None:
            raise NotFoundError(f"Category with id {category_id} not found")
        return category

    def create_category(self, *, category_in: schemas.CategoryCreate) -> models.Category:
        if crud.category.exists(self.db, name=category_in.name):
            raise ConflictError(f"Category with name '{category_in.name}' already exists")
        category = crud.category.create(self.db, obj_in=category_in)
        logger.info("Category %s created", category.id)
        return category

    def update_category(self, *, category_id: int, category_in: schemas.CategoryUpdate) -> models.Category:
        category = self.get_category(category_id)
        if category_in.name and crud.category.exists(self.db, name=category_in.name, exclude_id=category_id):
            raise ConflictError(f"Category with name '{category_in.name}' already exists")
        return crud.category.update(self.db, db_obj=category, obj_in=category_in)

    def delete_category(self, *, category_id: int) -> None:
        self.get_category(category_id)
        if crud.category.has_subcategories(self.db, category_id=category_id):
            raise ConflictError(f"Category {category_id} still has subcategories")
        if self._is_selected_by_display(category_id=category_id):
            raise ConflictError(f"Category {category_id} is selected by a banner or homepage section")
        crud.category.remove(self.db, id=category_id)
        logger.info("Category %s deleted", category_id)

    # --- Subcategorias ---

    def get_subcategory(self, *, category_id: int, subcategory_id: int) -> models.Subcategory:
        subcategory = crud.subcategory.get(self.db, subcategory_id)
        if subcategory is None or subcategory.category_id != category_id:
            raise NotFoundError(
                f"Subcategory {subcategory_id} does not exist or does not belong to category {category_id}"
            )
        return subcategory

    def list_subcategories(self, *, category_id: int) -> list[models.Subcategory]:
        self.get_category(category_id)
        return crud.subcategory.get_by_category(self.db, category_id=category_id)

    def create_subcategory(
        self, *, category_id: int, subcategory_in: schemas.SubcategoryCreate
    ) -> models.Subcategory:
        self.get_category(category_id)
        if crud.subcategory.exists(self.db, name=subcategory_in.name):
            raise ConflictError(f"Subcategory with name '{subcategory_in.name}' already exists")
        subcategory = crud.subcategory.create_in_category(
            self.db, obj_in=subcategory_in, category_id=category_id
        )
        logger.info("Subcategory %s created in category %s", subcategory.id, category_id)
        return subcategory

    def update_subcategory(
        self, *, category_id: int, subcategory_id: int, subcategory_in: schemas.SubcategoryUpdate
    ) -> models.Subcategory:
        subcategory = self.get_subcategory(category_id=category_id, subcategory_id=subcategory_id)
        if subcategory_in.name and crud.subcategory.exists(
            self.db, name=subcategory_in.name, exclude_id=subcategory_id
        ):
            raise ConflictError(f"Subcategory with name '{subcategory_in.name}' already exists")
        return crud.subcategory.update(self.db, db_obj=subcategory, obj_in=subcategory_in)

    def delete_subcategory(self, *, category_id: int, subcategory_id: int) -> None:
        self.get_subcategory(category_id=category_id, subcategory_id=subcategory_id)
        if crud.subcategory.has_products(self.db, subcategory_id=subcategory_id):
            raise ConflictError(f"Subcategory {subcategory_id} still has products")
        if self._is_selected_by_display(subcategory_id=subcategory_id):
            raise ConflictError(f"Subcategory {subcategory_id} is selected by a banner or homepage section")
        crud.subcategory.remove(self.db, id=subcategory_id)
        logger.info("Subcategory %s deleted", subcategory_id)
