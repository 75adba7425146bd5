from fastapi import APIRouter, Header, HTTPException, Request
from typing import Optional

from globaledge.schemas.draft import Draft, DraftCreate, DraftUpdate, BookingRequest, Receipt
from globaledge.services import drafts as draft_store
from globaledge.core.errors import DraftValidationError, DraftNotFoundError, check_not_found
from globaledge.core.rate_limit import check_rate_limit
from globaledge.utils.idempotency import get_idempotent, set_idempotent

router = APIRouter(prefix="/drafts", tags=["drafts"])
receipts_router = APIRouter(prefix="/receipts", tags=["receipts"])


def _client_id(request: Request) -> str:
    return request.client.host if request.client else "anonymous"


@router.post("", response_model=Draft, status_code=201)
async def create_draft(payload: DraftCreate):
    try:
        draft = draft_store.build_draft(payload)
    except DraftValidationError as e:
        raise HTTPException(status_code=422, detail=e.problems)

    await draft_store.save_draft(draft)
    return draft


@router.get("/{draft_id}", response_model=Draft)
async def get_draft(draft_id: str):
    draft = await draft_store.get_draft(draft_id)
    check_not_found(draft, "Draft", draft_id)
    return draft


@router.patch("/{draft_id}", response_model=Draft)
async def update_draft(draft_id: str, payload: DraftUpdate):
    try:
        return await draft_store.update_draft(draft_id, payload)
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DraftValidationError as e:
        raise HTTPException(status_code=422, detail=e.problems)


@router.delete("/{draft_id}")
async def delete_draft(draft_id: str):
    deleted = await draft_store.clear_draft(draft_id)
    check_not_found(deleted, "Draft", draft_id)
    return {"deleted": True}


@router.post("/{draft_id}/book", response_model=Receipt, status_code=201)
async def book_draft(
    draft_id: str,
    payload: BookingRequest,
    request: Request,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
):
    await check_rate_limit(_client_id(request))

    if idempotency_key:
        previous = await get_idempotent(f"book:{draft_id}:{idempotency_key}")
        if previous:
            return Receipt.model_validate(previous)

    draft = await draft_store.get_draft(draft_id)
    check_not_found(draft, "Draft", draft_id)

    receipt = await draft_store.book_draft(draft, payload)

    if idempotency_key:
        await set_idempotent(
            f"book:{draft_id}:{idempotency_key}",
            receipt.model_dump(mode="json", by_alias=True),
        )
    return receipt


@receipts_router.get("/{tracking_number}", response_model=Receipt)
async def get_receipt(tracking_number: str):
    receipt = await draft_store.get_receipt(tracking_number)
    check_not_found(receipt, "Receipt", tracking_number)
    return receipt
