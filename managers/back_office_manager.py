"""
Фасад бэк-офиса: поставщики, отзывы, склад.
"""
from datetime import datetime
from typing import Any, Optional

from domain.entities import Review, Supplier
from domain.result import Result
from repositories.inventory_repository import InventoryRepository
from repositories.review_repository import ReviewRepository
from repositories.supplier_repository import SupplierRepository
from use_cases import back_office_use_cases as uc


class BackOfficeManager:
    """Собирает use cases трёх репозиториев за одной точкой входа."""

    def __init__(
        self,
        suppliers: SupplierRepository,
        reviews: ReviewRepository,
        inventory: InventoryRepository,
    ):
        self._get_suppliers = uc.GetSuppliersUseCase(suppliers)
        self._get_supplier = uc.GetSupplierUseCase(suppliers)
        self._create_supplier = uc.CreateSupplierUseCase(suppliers)
        self._update_supplier = uc.UpdateSupplierUseCase(suppliers)
        self._delete_supplier = uc.DeleteSupplierUseCase(suppliers)

        self._get_reviews = uc.GetReviewsUseCase(reviews)
        self._create_review = uc.CreateReviewUseCase(reviews)
        self._update_review = uc.UpdateReviewUseCase(reviews)
        self._delete_review = uc.DeleteReviewUseCase(reviews)
        self._get_rating = uc.GetMenuItemRatingUseCase(reviews)

        self._get_inventory = uc.GetInventoryUseCase(inventory)
        self._check_availability = uc.CheckAvailabilityUseCase(inventory)
        self._consume = uc.ConsumeInventoryUseCase(inventory)
        self._get_low_stock = uc.GetLowStockUseCase(inventory)
        self._get_dashboard = uc.GetInventoryDashboardUseCase(inventory)

    # --- Suppliers ---

    async def get_suppliers(self, token: str, active: Optional[bool] = None) -> Result[list[Supplier]]:
        return await self._get_suppliers.execute(token, active=active)

    async def get_supplier(self, supplier_id: str, token: str) -> Result[Supplier]:
        return await self._get_supplier.execute(supplier_id, token)

    async def create_supplier(self, data: dict[str, Any], token: str) -> Result[Supplier]:
        return await self._create_supplier.execute(data, token)

    async def update_supplier(self, supplier_id: str, updates: dict[str, Any], token: str) -> Result[Supplier]:
        return await self._update_supplier.execute(supplier_id, updates, token)

    async def delete_supplier(self, supplier_id: str, token: str) -> Result[None]:
        return await self._delete_supplier.execute(supplier_id, token)

    # --- Reviews ---

    async def get_reviews(
        self,
        token: str,
        user_id: Optional[str] = None,
        menu_item_id: Optional[str] = None,
        rating: Optional[int] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Result[list[Review]]:
        return await self._get_reviews.execute(
            token, user_id=user_id, menu_item_id=menu_item_id, rating=rating, date_from=date_from, date_to=date_to
        )

    async def create_review(self, data: dict[str, Any], token: str) -> Result[Review]:
        return await self._create_review.execute(data, token)

    async def update_review(self, review_id: str, updates: dict[str, Any], token: str) -> Result[Review]:
        return await self._update_review.execute(review_id, updates, token)

    async def delete_review(self, review_id: str, token: str) -> Result[None]:
        return await self._delete_review.execute(review_id, token)

    async def get_menu_item_rating(self, menu_item_id: str, token: str) -> Result[dict]:
        return await self._get_rating.execute(menu_item_id, token)

    # --- Inventory ---

    async def get_inventory(self, token: str) -> Result[list]:
        return await self._get_inventory.execute(token)

    async def check_availability(self, items: list[dict], token: str) -> Result[dict]:
        return await self._check_availability.execute(items, token)

    async def consume_inventory(
        self,
        token: str,
        order_id: Optional[str] = None,
        items: Optional[list[dict]] = None,
    ) -> Result[dict]:
        return await self._consume.execute(token, order_id=order_id, items=items)

    async def get_low_stock(self, token: str) -> Result[list]:
        return await self._get_low_stock.execute(token)

    async def get_inventory_dashboard(self, token: str) -> Result[dict]:
        return await self._get_dashboard.execute(token)
