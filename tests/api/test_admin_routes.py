"""Admin endpoints against a mocked repository."""

from decimal import Decimal

import pytest

from bigbasket.domain.errors import DuplicateProduct
from bigbasket.domain.schemas import Product, ProductIn


def make_product(product_id=1, **overrides):
    data = dict(
        id=product_id,
        name="TestProduct",
        price=Decimal("50"),
        stock_quantity=100,
        discount_percentage=Decimal("4"),
        gst_percentage=Decimal("8"),
    )
    data.update(overrides)
    return Product(**data)


class TestGetAllProductsByAdmin:
    def test_returns_all_products(self, client, mock_repository):
        products = [
            make_product(1, name="TestProduct1", price=Decimal("50"), stock_quantity=100,
                         discount_percentage=Decimal("2"), gst_percentage=Decimal("3")),
            make_product(2, name="TestProduct2", price=Decimal("40"), stock_quantity=40,
                         discount_percentage=Decimal("4"), gst_percentage=Decimal("5")),
            make_product(3, name="TestProduct3", price=Decimal("250"), stock_quantity=20,
                         discount_percentage=Decimal("7"), gst_percentage=Decimal("2")),
        ]
        mock_repository.get_all_products_by_admin.return_value = products

        response = client.get("/admin/products")

        assert response.status_code == 200
        assert [Product.model_validate(p) for p in response.json()] == products
        mock_repository.get_all_products_by_admin.assert_called_once_with()

    def test_empty_catalog(self, client, mock_repository):
        mock_repository.get_all_products_by_admin.return_value = []

        response = client.get("/admin/products")

        assert response.status_code == 200
        assert response.json() == []


class TestGetProductById:
    @pytest.mark.parametrize("product_id", [1, 42])
    def test_returns_specific_product(self, client, mock_repository, product_id):
        product = make_product(product_id)
        mock_repository.get_product_by_id.return_value = product

        response = client.get(f"/admin/products/{product_id}")

        assert response.status_code == 200
        assert Product.model_validate(response.json()) == product
        mock_repository.get_product_by_id.assert_called_once_with(product_id)

    def test_repeated_reads_are_identical(self, client, mock_repository):
        mock_repository.get_product_by_id.return_value = make_product(1)

        first = client.get("/admin/products/1")
        second = client.get("/admin/products/1")

        assert first.json() == second.json()

    def test_unknown_product_is_404(self, client, mock_repository):
        mock_repository.get_product_by_id.return_value = None

        response = client.get("/admin/products/99")

        assert response.status_code == 404


class TestRefillStock:
    def test_returns_updated_product(self, client, mock_repository):
        product = make_product(1, name="TestProduct3", price=Decimal("70"), stock_quantity=50)
        mock_repository.refill_stock.return_value = product

        response = client.put("/admin/products/1/refill", params={"quantity": 30})

        assert response.status_code == 200
        # handler zwraca dokladnie to co repozytorium, bez wlasnej arytmetyki
        assert Product.model_validate(response.json()) == product
        mock_repository.refill_stock.assert_called_once_with(1, 30)

    def test_unknown_product_is_404(self, client, mock_repository):
        mock_repository.refill_stock.return_value = None

        response = client.put("/admin/products/99/refill", params={"quantity": 5})

        assert response.status_code == 404

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_is_rejected(self, client, mock_repository, quantity):
        response = client.put("/admin/products/1/refill", params={"quantity": quantity})

        assert response.status_code == 422
        mock_repository.refill_stock.assert_not_called()


class TestPostNewProduct:
    def test_posts_the_product(self, client, mock_repository):
        payload = {
            "id": 1,
            "name": "TestProduct2",
            "price": "20",
            "stock_quantity": 30,
            "discount_percentage": "5",
            "gst_percentage": "4",
        }
        mock_repository.post_new_product.return_value = Product(**payload)

        response = client.post("/admin/products", json=payload)

        assert response.status_code == 201
        assert response.headers["location"] == "/admin/products/1"
        assert Product.model_validate(response.json()) == Product(**payload)
        mock_repository.post_new_product.assert_called_once_with(ProductIn(**payload))

    def test_store_assigns_id(self, client, mock_repository):
        mock_repository.post_new_product.return_value = make_product(7, name="Ghee")

        response = client.post("/admin/products", json={"name": "Ghee", "price": "50"})

        assert response.status_code == 201
        assert response.json()["id"] == 7
        assert response.headers["location"] == "/admin/products/7"

    def test_duplicate_id_is_409(self, client, mock_repository):
        mock_repository.post_new_product.side_effect = DuplicateProduct(1)

        response = client.post("/admin/products", json={"id": 1, "name": "Ghee", "price": "50"})

        assert response.status_code == 409

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Ghee", "price": "-1"},
            {"name": "Ghee", "price": "10", "stock_quantity": -1},
            {"name": "Ghee", "price": "10", "gst_percentage": "101"},
            {"name": "", "price": "10"},
        ],
    )
    def test_invalid_payload_is_rejected(self, client, mock_repository, payload):
        response = client.post("/admin/products", json=payload)

        assert response.status_code == 422
        mock_repository.post_new_product.assert_not_called()
