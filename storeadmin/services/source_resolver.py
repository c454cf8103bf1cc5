# storeadmin/services/source_resolver.py

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from .. import models, schemas, crud
from ..models import ProductSource
from .errors import InvalidArgumentError, NotFoundError

@dataclass
class ResolvedTargets:
    """
    Resultado da resolução de um seletor de fonte. Apenas um dos alvos fica
    preenchido, de acordo com `source`.
    """
    source: ProductSource
    products: list[models.Product] = field(default_factory=list)
    category: models.Category | None = None
    subcategory: models.Subcategory | None = None
    deal: models.Deal | None = None
    external_link: str | None = None

class ProductSourceResolver:
    """
    Valida um seletor de fonte (manual, categoria, subcategoria, oferta ou link
    externo) e devolve os alvos resolvidos. Só faz leituras; quem chama é
    responsável por gravar o vínculo com `attach_targets`.
    """
    def __init__(self, db: Session):
        self.db = db

    def resolve(self, selector, *, require_category: bool = False) -> ResolvedTargets:
        """
        :param selector: uma das variantes de schemas.SourceSelector
        :param require_category: caminho estrito (seções da home), em que a
            subcategoria precisa vir acompanhada da categoria dona dela.
        """
        if isinstance(selector, schemas.ManualSource):
            return self._resolve_manual(selector.product_ids)
        if isinstance(selector, schemas.CategorySource):
            return self._resolve_category(selector.category_id)
        if isinstance(selector, schemas.SubcategorySource):
            return self._resolve_subcategory(
                selector.subcategory_id, selector.category_id, require_category=require_category
            )
        if isinstance(selector, schemas.DealSource):
            return self._resolve_deal(selector.deal_id)
        if isinstance(selector, schemas.ExternalSource):
            return self._resolve_external(selector.external_link)
        raise InvalidArgumentError("unsupported source type")

    def _resolve_manual(self, product_ids: list[int]) -> ResolvedTargets:
        if not product_ids:
            raise InvalidArgumentError("manual source requires at least one product id")

        found = crud.product.get_by_ids(self.db, ids=product_ids)
        missing = [pid for pid in dict.fromkeys(product_ids) if pid not in found]
        if missing:
            raise NotFoundError(f"Products not found: {', '.join(str(pid) for pid in missing)}")

        # Mantém a ordem do chamador, inclusive ids repetidos
        return ResolvedTargets(
            source=ProductSource.MANUAL,
            products=[found[pid] for pid in product_ids],
        )

    def _resolve_category(self, category_id: int | None) -> ResolvedTargets:
        if category_id is None:
            raise InvalidArgumentError("category source requires a category id")
        category = crud.category.get(self.db, category_id)
        if category is None:
            raise NotFoundError(f"Category with id {category_id} not found")
        return ResolvedTargets(source=ProductSource.CATEGORY, category=category)

    def _resolve_subcategory(
        self, subcategory_id: int | None, category_id: int | None, *, require_category: bool
    ) -> ResolvedTargets:
        if subcategory_id is None:
            raise InvalidArgumentError("subcategory source requires a subcategory id")
        if require_category and category_id is None:
            raise InvalidArgumentError("subcategory source requires the owning category id")

        subcategory = crud.subcategory.get(self.db, subcategory_id)
        if subcategory is None:
            raise NotFoundError(f"Subcategory with id {subcategory_id} not found")
        if category_id is not None and subcategory.category_id != category_id:
            raise NotFoundError(
                f"Subcategory {subcategory_id} does not exist or does not belong to category {category_id}"
            )
        return ResolvedTargets(source=ProductSource.SUBCATEGORY, subcategory=subcategory)

    def _resolve_deal(self, deal_id: int | None) -> ResolvedTargets:
        if deal_id is None:
            raise InvalidArgumentError("deal source requires a deal id")
        # O status da oferta não importa para vitrines
        deal = crud.deal.get(self.db, deal_id)
        if deal is None:
            raise NotFoundError(f"Deal with id {deal_id} not found")
        return ResolvedTargets(source=ProductSource.DEAL, deal=deal)

    def _resolve_external(self, external_link: str | None) -> ResolvedTargets:
        if external_link is None or not external_link.strip():
            raise InvalidArgumentError("external source requires a non-empty link")
        return ResolvedTargets(source=ProductSource.EXTERNAL, external_link=external_link.strip())

def attach_targets(entity, targets: ResolvedTargets) -> None:
    """
    Grava os alvos resolvidos numa vitrine (Banner ou HomePageSection).
    Todos os slots são reescritos, então trocar de fonte limpa as outras.
    Não faz commit.
    """
    entity.product_source = targets.source

    entity.product_links.clear()
    for product in targets.products:
        entity.products.append(product)

    entity.selected_category = targets.category
    entity.selected_category_id = targets.category.id if targets.category else None
    entity.selected_subcategory = targets.subcategory
    entity.selected_subcategory_id = targets.subcategory.id if targets.subcategory else None
    entity.selected_deal = targets.deal
    entity.selected_deal_id = targets.deal.id if targets.deal else None
    entity.external_link = targets.external_link

def products_for(db: Session, entity, *, limit: int = 50) -> list[models.Product]:
    """
    Resolve sob demanda os produtos exibidos por uma vitrine. Só entram
    produtos com status AVAILABLE ou LOW_STOCK.
    """
    source = entity.product_source
    if source == ProductSource.MANUAL:
        return [
            product for product in entity.products
            if product.status in models.DISPLAYABLE_STATUSES
        ][:limit]
    if source == ProductSource.EXTERNAL:
        return []

    query = crud.product.displayable(db)
    if source == ProductSource.CATEGORY:
        query = query.join(models.Subcategory).filter(
            models.Subcategory.category_id == entity.selected_category_id
        )
    elif source == ProductSource.SUBCATEGORY:
        query = query.filter(models.Product.subcategory_id == entity.selected_subcategory_id)
    elif source == ProductSource.DEAL:
        query = query.filter(models.Product.deal_id == entity.selected_deal_id)
    else:
        raise InvalidArgumentError("unsupported source type")
    return query.order_by(models.Product.id).limit(limit).all()
