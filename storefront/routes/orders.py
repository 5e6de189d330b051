"""Order API routes"""

from fastapi import APIRouter, Depends

from ..models.order import CreateOrderRequest, CreateOrderResponse
from ..services.order_service import OrderService
from .deps import get_order_service

router = APIRouter(prefix="/api", tags=["Orders"])


@router.post("/order", response_model=CreateOrderResponse)
async def create_order(
    request: CreateOrderRequest,
    order_service: OrderService = Depends(get_order_service),
):
    """
    Create a pending WooCommerce order.

    Returns the order-pay URL where the customer completes payment.
    """
    return await order_service.create_order(request)
