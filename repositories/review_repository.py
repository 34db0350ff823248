"""
Отзывы гостей о блюдах.
"""
from datetime import datetime
from typing import Optional

from domain.entities import Review, parse_entities, parse_entity
from domain.result import Result
from services import endpoints
from services.api_client import ApiClient, unwrap


class ReviewRepository:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_reviews(
        self,
        token: str,
        user: Optional[str] = None,
        menu_item: Optional[str] = None,
        rating: Optional[int] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Result[list[Review]]:
        params = {
            "user": user,
            "menuItem": menu_item,
            "rating": rating,
            "dateFrom": date_from,
            "dateTo": date_to,
        }
        result = await self.api.get_list(endpoints.REVIEWS, field="reviews", params=params, token=token)
        return result.flat_map(lambda rows: parse_entities(Review, rows, "review"))

    async def create_review(self, payload: dict, token: str) -> Result[Review]:
        result = await self.api.post(endpoints.REVIEWS, payload, token=token)
        return result.flat_map(lambda body: parse_entity(Review, unwrap(body, "review"), "review"))

    async def update_review(self, review_id: str, updates: dict, token: str) -> Result[Review]:
        result = await self.api.put(endpoints.item(endpoints.REVIEWS, review_id), updates, token=token)
        return result.flat_map(lambda body: parse_entity(Review, unwrap(body, "review"), "review"))

    async def delete_review(self, review_id: str, token: str) -> Result[None]:
        result = await self.api.delete(endpoints.item(endpoints.REVIEWS, review_id), token=token)
        return result.map(lambda _: None)

    async def get_rating_summary(self, menu_item_id: str, token: str) -> Result[dict]:
        """Сводка рейтинга блюда (средняя оценка, количество), схема за сервером."""
        return await self.api.get(endpoints.item(endpoints.REVIEW_RATING, menu_item_id), token=token)
