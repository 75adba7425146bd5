"""Booking drafts and receipts.

A draft lives for one booking session (``DRAFT_TTL``) and carries the quote
snapshot the customer agreed to. Booking turns it into a receipt kept for
``RECEIPT_TTL`` and clears the draft.
"""
import re
import uuid
import secrets
import logging
from datetime import datetime, timezone
from typing import Optional
from pydantic import ValidationError

from globaledge.core.config import settings
from globaledge.core.enums import ServiceType
from globaledge.core.errors import DraftValidationError, DraftNotFoundError
from globaledge.core.metrics import bookings_created
from globaledge.core.redis import require_redis
from globaledge.schemas.draft import (
    Draft, DraftCreate, DraftUpdate, BookingRequest, Receipt,
)
from globaledge.services.quote_engine import compute_quote
from globaledge.services.billing import compute_billing_totals
from globaledge.services.webhook import send_webhook

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]{2,}$")
MIN_ADDRESS_LENGTH = 6


def _draft_key(draft_id: str) -> str:
    return f"draft:{draft_id}"


def _receipt_key(tracking_number: str) -> str:
    return f"receipt:{tracking_number}"


def _contact_problems(recipient_email: str, recipient_address: str) -> list:
    problems = []
    if not EMAIL_RE.match((recipient_email or "").strip()):
        problems.append("recipient_email must be a valid email address")
    if len((recipient_address or "").strip()) < MIN_ADDRESS_LENGTH:
        problems.append(f"recipient_address must be at least {MIN_ADDRESS_LENGTH} characters")
    return problems


def new_tracking_number() -> str:
    return "GE" + secrets.token_hex(5).upper()


def build_draft(payload: DraftCreate) -> Draft:
    quote = compute_quote(payload.shipment)

    problems = []
    if quote is None:
        problems.append("no quote available: route and a billable weight are required")
    problems.extend(_contact_problems(payload.recipient_email, payload.recipient_address))
    if problems:
        raise DraftValidationError(problems)

    freight = payload.shipment.service_type == ServiceType.FREIGHT
    return Draft(
        draft_id=uuid.uuid4().hex,
        shipment=payload.shipment,
        recipient_email=payload.recipient_email.strip(),
        recipient_address=payload.recipient_address.strip(),
        contact=payload.contact,
        contents=payload.contents,
        declared_value=payload.declared_value,
        incoterm=(payload.incoterm or "DAP") if freight else None,
        price=quote.total_price,
        currency=quote.currency,
        eta_text=quote.eta_text,
        billable_weight_kg=quote.billable_weight_kg,
        created_at=datetime.now(timezone.utc),
    )


async def save_draft(draft: Draft) -> None:
    redis = require_redis()
    await redis.set(
        _draft_key(draft.draft_id),
        draft.model_dump_json(by_alias=True),
        ex=settings.DRAFT_TTL,
    )


async def get_draft(draft_id: str) -> Optional[Draft]:
    redis = require_redis()
    raw = await redis.get(_draft_key(draft_id))
    if not raw:
        return None
    try:
        return Draft.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Discarding unreadable draft {draft_id}: {e}")
        return None


async def update_draft(draft_id: str, patch: DraftUpdate) -> Draft:
    draft = await get_draft(draft_id)
    if draft is None:
        raise DraftNotFoundError(draft_id)

    changes = patch.model_dump(exclude_unset=True, exclude_none=True)
    if "contact" in changes:
        # only the contact fields sent in the patch replace stored ones
        changes["contact"] = draft.contact.model_copy(
            update=patch.contact.model_dump(exclude_unset=True)
        )
    updated = draft.model_copy(update=changes)

    problems = _contact_problems(updated.recipient_email, updated.recipient_address)
    if problems:
        raise DraftValidationError(problems)

    updated.recipient_email = updated.recipient_email.strip()
    updated.recipient_address = updated.recipient_address.strip()
    updated.updated_at = datetime.now(timezone.utc)
    await save_draft(updated)
    return updated


async def clear_draft(draft_id: str) -> bool:
    redis = require_redis()
    return bool(await redis.delete(_draft_key(draft_id)))


async def save_receipt(receipt: Receipt) -> None:
    redis = require_redis()
    await redis.set(
        _receipt_key(receipt.tracking_number),
        receipt.model_dump_json(by_alias=True),
        ex=settings.RECEIPT_TTL,
    )


async def get_receipt(tracking_number: str) -> Optional[Receipt]:
    redis = require_redis()
    raw = await redis.get(_receipt_key(tracking_number.strip().upper()))
    if not raw:
        return None
    try:
        return Receipt.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Discarding unreadable receipt {tracking_number}: {e}")
        return None


async def book_draft(draft: Draft, booking: BookingRequest) -> Receipt:
    shipment = draft.shipment
    if shipment.service_type == ServiceType.FREIGHT:
        service = str(shipment.freight.mode)
    else:
        service = str(shipment.parcel.level)

    receipt = Receipt(
        receipt_id=uuid.uuid4().hex,
        tracking_number=new_tracking_number(),
        draft_id=draft.draft_id,
        service_type=shipment.service_type,
        service=service,
        route=shipment.route,
        eta_text=draft.eta_text,
        billable_weight_kg=draft.billable_weight_kg,
        totals=compute_billing_totals(draft.price, booking.payment_method, booking.insure),
        payment_method=booking.payment_method,
        contact=draft.contact,
        recipient_email=draft.recipient_email,
        recipient_address=draft.recipient_address,
        booked_at=datetime.now(timezone.utc),
    )

    await save_receipt(receipt)
    await clear_draft(draft.draft_id)
    bookings_created.labels(
        service_type=str(receipt.service_type),
        payment_method=str(receipt.payment_method),
    ).inc()
    logger.info(f"Booked draft {draft.draft_id} as shipment {receipt.tracking_number}")

    await send_webhook({
        "event": "shipment.booked",
        "tracking_number": receipt.tracking_number,
        "service_type": str(receipt.service_type),
        "total": receipt.totals.total,
        "currency": receipt.totals.currency,
    })

    return receipt
