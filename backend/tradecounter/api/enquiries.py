"""Trade enquiry submission."""

import logging
import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from tradecounter.db.base import SessionLocal, get_db
from tradecounter.models.enquiry import Enquiry, EnquiryItem, EnquiryStatus
from tradecounter.models.product import Product
from tradecounter.schemas.enquiry import EnquiryCreate, EnquiryReceipt
from tradecounter.services.mailer import MailerError, render_enquiry_email, send_mail

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/enquiries", tags=["enquiries"])


async def notify_enquiry(enquiry_id: uuid.UUID, subject: str, html_body: str, reply_to: str) -> None:
    """Background task: mail the sales inbox and record whether it went out."""
    try:
        await run_in_threadpool(send_mail, subject, html_body, reply_to)
        new_status = EnquiryStatus.NOTIFIED
    except MailerError:
        new_status = EnquiryStatus.NOTIFY_FAILED

    async with SessionLocal() as session:
        enquiry = await session.get(Enquiry, enquiry_id)
        if enquiry is not None:
            enquiry.status = new_status
            await session.commit()


@router.post("", response_model=EnquiryReceipt)
async def create_enquiry(
    body: EnquiryCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    """Store an enquiry from the cart and notify sales.

    Items carry identities only; names and labels are looked up here so the
    notification reflects current product data.
    """
    product_ids = {item.product_id for item in body.items}
    result = await db.execute(
        select(Product).where(
            Product.id.in_(product_ids),
            Product.is_active == True,  # noqa: E712
        )
    )
    products = {p.id: p for p in result.scalars().all()}

    missing_ids = product_ids - set(products.keys())
    if missing_ids:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Products not available: {', '.join(str(i) for i in sorted(missing_ids))}",
        )

    lines = []
    for item in body.items:
        product = products[item.product_id]
        variant = next((v for v in product.variants if v.id == item.variant_id), None)
        if variant is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Variant {item.variant_id} does not belong to product {item.product_id}",
            )
        lines.append((product.name, variant.label, item.quantity))

    customer = body.customer
    enquiry = Enquiry(
        id=uuid.uuid4(),
        customer_name=customer.name,
        customer_company=customer.company,
        customer_email=str(customer.email),
        customer_phone=customer.phone,
        message=body.message,
        status=EnquiryStatus.RECEIVED,
        items=[
            EnquiryItem(
                product_id=item.product_id,
                variant_id=item.variant_id,
                quantity=item.quantity,
            )
            for item in body.items
        ],
    )
    db.add(enquiry)
    await db.flush()
    logger.info(f"Enquiry {enquiry.id} received from {enquiry.customer_email} ({len(lines)} lines)")

    html_body = render_enquiry_email(
        reference=str(enquiry.id),
        customer_name=customer.name,
        customer_company=customer.company,
        customer_email=str(customer.email),
        customer_phone=customer.phone,
        message=body.message,
        lines=lines,
    )
    background_tasks.add_task(
        notify_enquiry,
        enquiry.id,
        f"New trade enquiry from {customer.name}",
        html_body,
        str(customer.email),
    )

    return EnquiryReceipt(id=enquiry.id, status=EnquiryStatus.RECEIVED, item_count=len(body.items))
