"""Inventory item endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from stockledger.api.dependencies import (
    get_adjust_quantity_use_case,
    get_engine,
    get_record_stock_input_use_case,
    get_record_stock_output_use_case,
    get_save_item_use_case,
)
from stockledger.application.dto.mappers import item_response, movement_response
from stockledger.application.dto.requests import (
    AdjustQuantityRequest,
    ItemFormRequest,
    StockMovementRequest,
)
from stockledger.application.dto.responses import (
    ErrorResponse,
    ItemListResponse,
    ItemResponse,
    MovementListResponse,
    StockChangeResponse,
)
from stockledger.application.use_cases import (
    AdjustDirection,
    AdjustQuantityUseCase,
    RecordStockInputUseCase,
    RecordStockOutputUseCase,
    SaveItemUseCase,
)
from stockledger.core.exceptions import ItemNotFoundError
from stockledger.core.services import (
    LedgerEngine,
    export_items_csv,
    list_categories,
    search_items,
)

router = APIRouter(prefix="/api/items", tags=["items"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("", response_model=ItemListResponse)
async def list_items(
    q: str | None = Query(default=None, description="Search name, description or category"),
    category: str | None = Query(default=None, description="Exact category"),
    sort_by: str = Query(default="name"),
    descending: bool = Query(default=False),
    engine: LedgerEngine = Depends(get_engine),
) -> ItemListResponse:
    """List items with optional search, category filter and sort."""
    items = search_items(engine.items, q, category, sort_by, descending)
    return ItemListResponse(items=[item_response(i) for i in items], total=len(items))


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def create_item(
    request: ItemFormRequest,
    use_case: SaveItemUseCase = Depends(get_save_item_use_case),
) -> ItemResponse:
    """Create an item; a starting quantity is logged as an entrada."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/categories", response_model=list[str])
async def get_categories(engine: LedgerEngine = Depends(get_engine)) -> list[str]:
    """Distinct categories in use."""
    return list_categories(engine.items)


@router.get("/export")
async def export_items(engine: LedgerEngine = Depends(get_engine)) -> Response:
    """Download every item as CSV."""
    filename = f"inventory_{date.today().isoformat()}.csv"
    return Response(
        content=export_items_csv(engine.items),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{item_id}", response_model=ItemResponse, responses=NOT_FOUND)
async def get_item(item_id: str, engine: LedgerEngine = Depends(get_engine)) -> ItemResponse:
    item = engine.get_item_by_id(item_id)
    if item is None:
        raise ItemNotFoundError(item_id)
    return item_response(item)


@router.put("/{item_id}", response_model=ItemResponse, responses=NOT_FOUND)
async def update_item(
    item_id: str,
    request: ItemFormRequest,
    use_case: SaveItemUseCase = Depends(get_save_item_use_case),
) -> ItemResponse:
    """Replace an item's fields; quantity changes are logged as movements."""
    result = await use_case.execute(request, item_id=item_id)
    return use_case.to_response(result)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: str, engine: LedgerEngine = Depends(get_engine)) -> Response:
    """Delete an item; its movements are kept. Unknown ids are ignored."""
    await engine.delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{item_id}/movements", response_model=MovementListResponse)
async def get_item_movements(
    item_id: str,
    engine: LedgerEngine = Depends(get_engine),
) -> MovementListResponse:
    """Movement history of one item, newest first; works after deletion."""
    movements = engine.get_movements_by_item_id(item_id)
    return MovementListResponse(
        movements=[movement_response(m) for m in movements],
        total=len(movements),
    )


@router.post(
    "/{item_id}/stock-in",
    response_model=StockChangeResponse,
    responses={400: {"model": ErrorResponse}, **NOT_FOUND},
)
async def stock_in(
    item_id: str,
    request: StockMovementRequest,
    use_case: RecordStockInputUseCase = Depends(get_record_stock_input_use_case),
) -> StockChangeResponse:
    result = await use_case.execute(item_id, request)
    return use_case.to_response(result)


@router.post(
    "/{item_id}/stock-out",
    response_model=StockChangeResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, **NOT_FOUND},
)
async def stock_out(
    item_id: str,
    request: StockMovementRequest,
    use_case: RecordStockOutputUseCase = Depends(get_record_stock_output_use_case),
) -> StockChangeResponse:
    result = await use_case.execute(item_id, request)
    return use_case.to_response(result)


@router.post(
    "/{item_id}/increment",
    response_model=StockChangeResponse,
    responses={400: {"model": ErrorResponse}, **NOT_FOUND},
)
async def increment(
    item_id: str,
    request: AdjustQuantityRequest | None = None,
    use_case: AdjustQuantityUseCase = Depends(get_adjust_quantity_use_case),
) -> StockChangeResponse:
    result = await use_case.execute(
        item_id, request or AdjustQuantityRequest(), AdjustDirection.INCREMENT
    )
    return use_case.to_response(result)


@router.post(
    "/{item_id}/decrement",
    response_model=StockChangeResponse,
    responses={400: {"model": ErrorResponse}, **NOT_FOUND},
)
async def decrement(
    item_id: str,
    request: AdjustQuantityRequest | None = None,
    use_case: AdjustQuantityUseCase = Depends(get_adjust_quantity_use_case),
) -> StockChangeResponse:
    """Remove units; quantity never drops below zero."""
    result = await use_case.execute(
        item_id, request or AdjustQuantityRequest(), AdjustDirection.DECREMENT
    )
    return use_case.to_response(result)
