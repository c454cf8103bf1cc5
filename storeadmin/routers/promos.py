# storeadmin/routers/promos.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..database import get_db

router = APIRouter(
    prefix="/promos",
    tags=["Promos"]
)

@router.post("/", response_model=schemas.Promo, status_code=status.HTTP_201_CREATED)
def create_promo(promo_in: schemas.PromoCreate, db: Session = Depends(get_db)):
    if crud.promo.get_by_code(db, promo_code=promo_in.promo_code):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Promo code already exists")
    return crud.promo.create(db, obj_in=promo_in)

@router.get("/", response_model=List[schemas.Promo])
def read_promos(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.promo.get_multi(db, skip=skip, limit=limit)

@router.get("/code/{promo_code}", response_model=schemas.Promo)
def read_promo_by_code(promo_code: str, db: Session = Depends(get_db)):
    db_promo = crud.promo.get_by_code(db, promo_code=promo_code)
    if db_promo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Promo not found")
    return db_promo

@router.delete("/{promo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_promo(promo_id: int, db: Session = Depends(get_db)):
    if crud.promo.remove(db, id=promo_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Promo not found")
    return None
