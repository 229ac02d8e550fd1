"""Transaction Service — order creation, order queries and sales statistics.

Invariants:
    - An order has at least one item (schema) and every bookId must exist;
      one unknown bookId aborts the whole order before anything is written
    - Order and items are persisted in a single commit
    - totalAmount = sum(book.price * quantity) at the book's current price
    - Statistics ranking is stable: equal totals keep the store's row order
      (genre name ascending, books without a genre last)
"""

import logging
from decimal import Decimal

from library_api.core.domain_types import AuthContext, OrderId
from library_api.core.errors import ResourceNotFoundError
from library_api.core.repository_protocols import (
    BookRepository, OrderRepository, UserRepository,
)
from library_api.core.sales_stats import compute_sales_statistics
from library_api.models import Order, OrderItem
from library_api.schemas.transaction import (
    CreatedOrderResponse, OrderResponse, TransactionCreate,
)

logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(
        self,
        orders: OrderRepository,
        books: BookRepository,
        users: UserRepository,
    ):
        self._orders = orders
        self._books = books
        self._users = users

    async def create(
        self, auth: AuthContext, body: TransactionCreate,
    ) -> CreatedOrderResponse:
        user = await self._users.get(auth.user_id)
        if not user:
            raise ResourceNotFoundError("User", auth.user_id)

        requested = [item.book_id for item in body.items]
        books = {b.id: b for b in await self._books.get_many(requested)}
        missing = [str(i) for i in dict.fromkeys(requested) if i not in books]
        if missing:
            raise ResourceNotFoundError("One or more books", ", ".join(missing))

        total_amount = sum(
            (Decimal(books[item.book_id].price) * item.quantity for item in body.items),
            Decimal("0"),
        )
        order = await self._orders.add(Order(
            user=user,
            items=[
                OrderItem(book=books[item.book_id], quantity=item.quantity)
                for item in body.items
            ],
        ))

        created = OrderResponse.model_validate(order)
        return CreatedOrderResponse.model_validate(
            {**created.model_dump(), "total_amount": total_amount},
        )

    async def list_all(self) -> list[OrderResponse]:
        return [OrderResponse.model_validate(o) for o in await self._orders.list_all()]

    async def get(self, order_id: OrderId) -> OrderResponse:
        order = await self._orders.get(order_id)
        if not order:
            raise ResourceNotFoundError("Order", order_id)
        return OrderResponse.model_validate(order)

    async def statistics(self) -> dict:
        total_orders = await self._orders.count()
        rows = await self._orders.quantity_by_genre()
        return compute_sales_statistics(total_orders, rows)
