"""Transaction Routes — place orders (authenticated), browse orders, sales statistics.

Invariants:
    - POST requires a bearer token; the AuthContext identifies the buyer
    - /statistics registered before /{order_id} so it is never parsed as an id
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from library_api.api.auth_gate import require_auth
from library_api.api.dependencies import get_transaction_service
from library_api.core.domain_types import AuthContext, OrderId
from library_api.schemas.envelope import success_response
from library_api.schemas.transaction import TransactionCreate
from library_api.services.transaction_service import TransactionService

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    body: TransactionCreate,
    auth: AuthContext = Depends(require_auth),
    service: TransactionService = Depends(get_transaction_service),
) -> JSONResponse:
    order = await service.create(auth, body)
    return success_response(
        "Order created successfully", order, status.HTTP_201_CREATED,
    )


@router.get("")
async def list_transactions(
    service: TransactionService = Depends(get_transaction_service),
) -> JSONResponse:
    """All orders, newest first."""
    return success_response(
        "All orders retrieved successfully", await service.list_all(),
    )


@router.get("/statistics")
async def transaction_statistics(
    service: TransactionService = Depends(get_transaction_service),
) -> JSONResponse:
    return success_response(
        "Order statistics retrieved successfully", await service.statistics(),
    )


@router.get("/{order_id}")
async def get_transaction(
    order_id: UUID,
    service: TransactionService = Depends(get_transaction_service),
) -> JSONResponse:
    order = await service.get(OrderId(order_id))
    return success_response("Order detail retrieved successfully", order)
