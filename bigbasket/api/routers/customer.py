# bigbasket/api/routers/customer.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from bigbasket.api.dependencies import get_repository
from bigbasket.domain.errors import (
    CartNotFound,
    CheckoutInProgress,
    EmptyCart,
    InvalidQuantity,
    OutOfStock,
    ProductNotFound,
)
from bigbasket.domain.schemas import AddToCartIn, Cart, Order, ProductForCustomer
from bigbasket.repos.base import Repository

router = APIRouter(prefix="/customer", tags=["customer"])


@router.get("/products", response_model=List[ProductForCustomer])
def get_all_products_by_customer(repo: Repository = Depends(get_repository)):
    return repo.get_all_products_by_customer()


@router.post("/cart", response_model=Cart)
def add_to_cart(payload: AddToCartIn, repo: Repository = Depends(get_repository)):
    item = payload.items[0]
    try:
        return repo.add_to_cart(payload.customer_id, item.product_id, item.quantity)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InvalidQuantity, OutOfStock) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/cart", response_model=List[Cart])
def get_all_products_from_cart(
    customer_id: Optional[int] = Query(None, gt=0),
    repo: Repository = Depends(get_repository),
):
    return repo.get_all_products_from_cart(customer_id)


@router.post("/{customer_id}/bill", response_model=Order)
def generate_bill(customer_id: int, repo: Repository = Depends(get_repository)):
    """
    Wystawia rachunek z aktywnego koszyka klienta.
    """
    try:
        return repo.generate_bill(customer_id)
    except (CartNotFound, ProductNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (EmptyCart, OutOfStock) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CheckoutInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
