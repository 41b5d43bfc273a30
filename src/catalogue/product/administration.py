"""Admin product management: stub creation, full-field updates and deletion.

Callers are expected to be authorized admins already; the HTTP layer checks
the role before any of these run.
"""

from collections.abc import Mapping

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from catalogue import settings
from catalogue.product.product import EDITABLE_FIELDS, Product
from catalogue.product.reviewing import replay_on_conflict
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)


class AdminService:
    def __init__(self, repository=None, attempts: int | None = None):
        self._repository = repository
        self.attempts = attempts or settings.SAVE_RETRY_ATTEMPTS

    @property
    def repository(self):
        return self._repository or current_domain.repository_for(Product)

    def create_product(self, owner) -> Product:
        """Create a placeholder product owned by ``owner`` for the admin to edit next."""
        product = self.repository.create({**settings.STUB_PRODUCT_DEFAULTS, "user_id": owner.id})
        logger.info("product_created", product_id=str(product.id), user_id=str(owner.id))
        return product

    def update_product(self, product_id, fields: Mapping) -> Product:
        """Overwrite every editable field; all of them must be present in ``fields``."""
        missing = [name for name in EDITABLE_FIELDS if name not in fields]
        if missing:
            raise ValidationError({name: ["This field is required"] for name in missing})

        values = {name: fields[name] for name in EDITABLE_FIELDS}

        def attempt():
            repo = self.repository
            with repo.locked(product_id):
                product = repo.get_by_id(product_id)
                product.update_details(**values)
                return repo.save(product)

        product = replay_on_conflict(attempt, attempts=self.attempts, product_id=product_id)
        logger.info("product_updated", product_id=str(product_id))
        return product

    def delete_product(self, product_id) -> None:
        self.repository.delete(product_id)
