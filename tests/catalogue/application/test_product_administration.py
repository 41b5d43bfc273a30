"""Application tests for admin create, update and delete."""

import pytest
from catalogue import settings
from catalogue.exceptions import ProductNotFoundError
from catalogue.product.administration import AdminService
from catalogue.product.listing import CatalogService
from catalogue.product.product import Review
from catalogue.product.reviewing import ReviewService
from protean import current_domain
from protean.exceptions import ValidationError

FULL_UPDATE = {
    "name": "Airpods Wireless Bluetooth Headphones",
    "price": 89.99,
    "description": "Bluetooth technology lets you connect it with compatible devices wirelessly.",
    "image": "/images/airpods.jpg",
    "brand": "Apple",
    "category": "Electronics",
    "count_in_stock": 10,
}


@pytest.fixture()
def service():
    return AdminService()


class TestCreateProduct:
    def test_stub_uses_placeholder_values(self, service, admin):
        product = service.create_product(admin)

        assert product.name == "Sample name"
        assert product.price == 0.0
        assert product.image == "/images/sample.jpg"
        assert product.brand == "Sample Brand"
        assert product.category == "Sample Category"
        assert product.count_in_stock == 0
        assert product.num_reviews == 0
        assert product.description == "Sample description"
        assert product.rating == 0.0

    def test_stub_is_owned_by_creator(self, service, admin):
        product = service.create_product(admin)
        assert product.user_id == admin.id

    def test_stub_is_persisted(self, service, admin, repository):
        product = service.create_product(admin)
        assert repository.get_by_id(product.id).name == settings.STUB_PRODUCT_DEFAULTS["name"]

    def test_each_stub_is_a_new_product(self, service, admin):
        assert service.create_product(admin).id != service.create_product(admin).id


class TestUpdateProduct:
    def test_overwrites_all_fields(self, service, admin, repository):
        product = service.create_product(admin)
        service.update_product(product.id, FULL_UPDATE)

        stored = repository.get_by_id(product.id)
        for name, value in FULL_UPDATE.items():
            assert getattr(stored, name) == value

    def test_missing_fields_rejected(self, service, admin, repository):
        product = service.create_product(admin)

        with pytest.raises(ValidationError) as exc:
            service.update_product(product.id, {"name": "Only a name"})

        assert set(exc.value.messages) == set(FULL_UPDATE) - {"name"}
        assert repository.get_by_id(product.id).name == "Sample name"

    def test_invalid_value_rejected(self, service, admin, repository):
        product = service.create_product(admin)

        with pytest.raises(ValidationError):
            service.update_product(product.id, {**FULL_UPDATE, "price": -5})

        assert repository.get_by_id(product.id).price == 0.0

    def test_keeps_reviews(self, service, admin, repository, shopper):
        product = service.create_product(admin)
        ReviewService().submit_review(product.id, shopper("alice"), rating=4, comment="Good")

        service.update_product(product.id, FULL_UPDATE)

        stored = repository.get_by_id(product.id)
        assert stored.num_reviews == 1
        assert stored.rating == 4.0

    def test_unknown_product(self, service):
        with pytest.raises(ProductNotFoundError):
            service.update_product("missing", FULL_UPDATE)


class TestDeleteProduct:
    def test_product_is_gone(self, service, admin):
        product = service.create_product(admin)
        service.delete_product(product.id)

        with pytest.raises(ProductNotFoundError):
            CatalogService().get_product(product.id)

    def test_reviews_are_removed_with_product(self, service, admin, shopper):
        product = service.create_product(admin)
        ReviewService().submit_review(product.id, shopper("alice"), rating=4, comment="Good")

        service.delete_product(product.id)

        assert current_domain.repository_for(Review)._dao.query.all().total == 0

    def test_other_products_survive(self, service, admin, repository):
        doomed = service.create_product(admin)
        survivor = service.create_product(admin)

        service.delete_product(doomed.id)

        assert repository.get_by_id(survivor.id).id == survivor.id

    def test_unknown_product(self, service):
        with pytest.raises(ProductNotFoundError):
            service.delete_product("missing")

    def test_deleting_twice(self, service, admin):
        product = service.create_product(admin)
        service.delete_product(product.id)

        with pytest.raises(ProductNotFoundError):
            service.delete_product(product.id)
