# bigbasket/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from bigbasket.api.dependencies import get_repository
from bigbasket.domain.errors import DuplicateProduct, InvalidQuantity
from bigbasket.domain.schemas import Product, ProductIn
from bigbasket.repos.base import Repository

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/products", response_model=List[Product])
def get_all_products_by_admin(repo: Repository = Depends(get_repository)):
    return repo.get_all_products_by_admin()


@router.get("/products/{product_id}", response_model=Product)
def get_product_by_id(product_id: int, repo: Repository = Depends(get_repository)):
    product = repo.get_product_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.put("/products/{product_id}/refill", response_model=Product)
def refill_stock(
    product_id: int,
    quantity: int = Query(..., gt=0),
    repo: Repository = Depends(get_repository),
):
    try:
        product = repo.refill_stock(product_id, quantity)
    except InvalidQuantity as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("/products", response_model=Product, status_code=201)
def post_new_product(
    payload: ProductIn,
    response: Response,
    repo: Repository = Depends(get_repository),
):
    """
    Dodaje produkt do katalogu. Location wskazuje na GET produktu.
    """
    try:
        product = repo.post_new_product(payload)
    except DuplicateProduct as e:
        raise HTTPException(status_code=409, detail=str(e))
    response.headers["Location"] = f"/admin/products/{product.id}"
    return product
