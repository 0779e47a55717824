from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.db.session import get_db
from app.schemas.common import envelope
from app.services.webhook_service import handle_event, verify_webhook

router = APIRouter(prefix="/api/webhooks", tags=["Webhooks"])


@router.post("/clerk")
async def clerk_webhook(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    # Signature covers the raw body, so read it before any parsing
    payload = await request.body()
    event = verify_webhook(payload, request.headers, settings.clerk_webhook_secret)
    await run_in_threadpool(handle_event, db, event)
    return envelope(message="Webhook Received")
