"""
Поставщики, отзывы и склад.
"""
from datetime import datetime
from typing import Any, Optional

from domain.entities import Review, Supplier
from domain.result import Failure, Result
from domain.validation import (
    ReviewInput,
    SupplierInput,
    require_text,
    require_token,
    require_updates,
    validate_input,
)
from repositories.inventory_repository import InventoryRepository
from repositories.review_repository import ReviewRepository
from repositories.supplier_repository import SupplierRepository


# ---------------------------------------------------------------------------
# Поставщики
# ---------------------------------------------------------------------------

class GetSuppliersUseCase:
    def __init__(self, repository: SupplierRepository):
        self.repository = repository

    async def execute(self, token: str, active: Optional[bool] = None) -> Result[list[Supplier]]:
        if failure := require_token(token):
            return failure
        result = await self.repository.get_suppliers(token, active=active)
        return result.with_context("Failed to load suppliers")


class GetSupplierUseCase:
    def __init__(self, repository: SupplierRepository):
        self.repository = repository

    async def execute(self, supplier_id: str, token: str) -> Result[Supplier]:
        if failure := require_token(token) or require_text(supplier_id, "Supplier ID"):
            return failure
        result = await self.repository.get_supplier(supplier_id, token)
        return result.with_context("Failed to load supplier")


class CreateSupplierUseCase:
    def __init__(self, repository: SupplierRepository):
        self.repository = repository

    async def execute(self, data: dict[str, Any], token: str) -> Result[Supplier]:
        if failure := require_token(token):
            return failure
        validated = validate_input(SupplierInput, data)
        if isinstance(validated, Failure):
            return validated
        result = await self.repository.create_supplier(validated.value.to_payload(), token)
        return result.with_context("Failed to create supplier")


class UpdateSupplierUseCase:
    def __init__(self, repository: SupplierRepository):
        self.repository = repository

    async def execute(self, supplier_id: str, updates: dict[str, Any], token: str) -> Result[Supplier]:
        if failure := require_token(token) or require_text(supplier_id, "Supplier ID") or require_updates(updates):
            return failure
        result = await self.repository.update_supplier(supplier_id, updates, token)
        return result.with_context("Failed to update supplier")


class DeleteSupplierUseCase:
    def __init__(self, repository: SupplierRepository):
        self.repository = repository

    async def execute(self, supplier_id: str, token: str) -> Result[None]:
        if failure := require_token(token) or require_text(supplier_id, "Supplier ID"):
            return failure
        result = await self.repository.delete_supplier(supplier_id, token)
        return result.with_context("Failed to delete supplier")


# ---------------------------------------------------------------------------
# Отзывы
# ---------------------------------------------------------------------------

class GetReviewsUseCase:
    def __init__(self, repository: ReviewRepository):
        self.repository = repository

    async def execute(
        self,
        token: str,
        user_id: Optional[str] = None,
        menu_item_id: Optional[str] = None,
        rating: Optional[int] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Result[list[Review]]:
        if failure := require_token(token):
            return failure
        if rating is not None and not 1 <= rating <= 5:
            return Failure.validation("Rating must be between 1 and 5")
        result = await self.repository.get_reviews(
            token, user=user_id, menu_item=menu_item_id, rating=rating, date_from=date_from, date_to=date_to
        )
        return result.with_context("Failed to load reviews")


class CreateReviewUseCase:
    def __init__(self, repository: ReviewRepository):
        self.repository = repository

    async def execute(self, data: dict[str, Any], token: str) -> Result[Review]:
        if failure := require_token(token):
            return failure
        validated = validate_input(ReviewInput, data)
        if isinstance(validated, Failure):
            return validated
        result = await self.repository.create_review(validated.value.to_payload(), token)
        return result.with_context("Failed to create review")


class UpdateReviewUseCase:
    def __init__(self, repository: ReviewRepository):
        self.repository = repository

    async def execute(self, review_id: str, updates: dict[str, Any], token: str) -> Result[Review]:
        if failure := require_token(token) or require_text(review_id, "Review ID") or require_updates(updates):
            return failure
        rating = updates.get("rating")
        if rating is not None and not (isinstance(rating, int) and 1 <= rating <= 5):
            return Failure.validation("Rating must be between 1 and 5")
        result = await self.repository.update_review(review_id, updates, token)
        return result.with_context("Failed to update review")


class DeleteReviewUseCase:
    def __init__(self, repository: ReviewRepository):
        self.repository = repository

    async def execute(self, review_id: str, token: str) -> Result[None]:
        if failure := require_token(token) or require_text(review_id, "Review ID"):
            return failure
        result = await self.repository.delete_review(review_id, token)
        return result.with_context("Failed to delete review")


class GetMenuItemRatingUseCase:
    def __init__(self, repository: ReviewRepository):
        self.repository = repository

    async def execute(self, menu_item_id: str, token: str) -> Result[dict]:
        if failure := require_token(token) or require_text(menu_item_id, "Menu item ID"):
            return failure
        result = await self.repository.get_rating_summary(menu_item_id, token)
        return result.with_context("Failed to load rating")


# ---------------------------------------------------------------------------
# Склад
# ---------------------------------------------------------------------------

class GetInventoryUseCase:
    def __init__(self, repository: InventoryRepository):
        self.repository = repository

    async def execute(self, token: str) -> Result[list]:
        if failure := require_token(token):
            return failure
        result = await self.repository.get_inventory(token)
        return result.with_context("Failed to load inventory")


class CheckAvailabilityUseCase:
    """Проверка наличия ингредиентов для позиций [{menuItem, quantity}]."""

    def __init__(self, repository: InventoryRepository):
        self.repository = repository

    async def execute(self, items: list[dict], token: str) -> Result[dict]:
        if failure := require_token(token):
            return failure
        if not items:
            return Failure.validation("No items to check")
        result = await self.repository.check_availability(items, token)
        return result.with_context("Failed to check availability")


class ConsumeInventoryUseCase:
    def __init__(self, repository: InventoryRepository):
        self.repository = repository

    async def execute(
        self,
        token: str,
        order_id: Optional[str] = None,
        items: Optional[list[dict]] = None,
    ) -> Result[dict]:
        if failure := require_token(token):
            return failure
        if not order_id and not items:
            return Failure.validation("Order ID or items are required")
        result = await self.repository.consume(token, order_id=order_id, items=items)
        return result.with_context("Failed to consume inventory")


class GetLowStockUseCase:
    def __init__(self, repository: InventoryRepository):
        self.repository = repository

    async def execute(self, token: str) -> Result[list]:
        if failure := require_token(token):
            return failure
        result = await self.repository.get_low_stock(token)
        return result.with_context("Failed to load low stock items")


class GetInventoryDashboardUseCase:
    def __init__(self, repository: InventoryRepository):
        self.repository = repository

    async def execute(self, token: str) -> Result[dict]:
        if failure := require_token(token):
            return failure
        result = await self.repository.get_dashboard(token)
        return result.with_context("Failed to load inventory dashboard")
