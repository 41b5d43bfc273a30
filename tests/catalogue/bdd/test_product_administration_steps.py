"""BDD tests for admin product management."""

from catalogue.product.administration import AdminService
from catalogue.product.listing import CatalogService
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/product_administration.feature")


@when("an admin creates a product", target_fixture="product_id")
def admin_creates_product(admin):
    return AdminService().create_product(admin).id


@when("an admin updates the product with only a name")
def admin_updates_name_only(product_id, capture):
    capture(lambda: AdminService().update_product(product_id, {"name": "Renamed"}))


@when("an admin deletes the product")
def admin_deletes_product(product_id):
    AdminService().delete_product(product_id)


@then(parsers.cfparse('the product is named "{name}"'))
def product_is_named(product_id, name):
    assert CatalogService().get_product(product_id).name == name
