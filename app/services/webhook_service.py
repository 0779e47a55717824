"""
Identity provider webhooks: keep local User rows in sync with Clerk.

Clerk delivers events through Svix, so payloads are verified with the svix library.
"""
import json
import logging
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.orm import Session
from svix.webhooks import Webhook, WebhookVerificationError

from app.core.errors import InvalidWebhook
from app.db.models.application import JobApplication
from app.db.models.user import User
from app.services.identity_provider import user_fields_from_profile

logger = logging.getLogger(__name__)

SVIX_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")


def verify_webhook(payload: bytes, headers: Mapping[str, str], secret: Optional[str]) -> Dict[str, Any]:
    """
    Verify and parse a Clerk webhook event.

    Raises:
        InvalidWebhook: Secret missing, or signature/payload invalid
    """
    if not secret:
        logger.error("CLERK_WEBHOOK_SECRET not configured")
        raise InvalidWebhook("Webhook secret not configured")

    svix_headers = {name: headers.get(name, "") for name in SVIX_HEADERS}
    try:
        Webhook(secret).verify(payload, svix_headers)
    except WebhookVerificationError as e:
        logger.warning(f"Webhook signature verification failed: {e}")
        raise InvalidWebhook() from e
    except ValueError as e:
        # Older svix releases also parse the body after checking the signature
        logger.warning(f"Webhook body is not valid JSON: {e}")
        raise InvalidWebhook() from e

    # verify() only checks the signature; the event comes from the signed body
    try:
        event = json.loads(payload)
    except ValueError as e:
        logger.warning(f"Webhook body is not valid JSON: {e}")
        raise InvalidWebhook() from e
    if not isinstance(event, dict):
        raise InvalidWebhook()
    return event


def handle_event(db: Session, event: Dict[str, Any]) -> str:
    """Apply one verified event. Returns the event type."""
    event_type = event.get("type", "")
    data = event.get("data") or {}
    user_id = data.get("id")

    if event_type in ("user.created", "user.updated") and user_id:
        fields = user_fields_from_profile(data)
        if not fields["email"]:
            logger.warning(f"Skipping {event_type} for user_id={user_id}: no email address")
            return event_type
        user = db.query(User).filter(User.id == user_id).first()
        if user is None:
            db.add(User(id=user_id, resume="", **fields))
        elif event_type == "user.updated":
            user.name = fields["name"]
            user.email = fields["email"]
            user.image = fields["image"]

    elif event_type == "user.deleted" and user_id:
        db.query(JobApplication).filter(JobApplication.user_id == user_id).delete(synchronize_session=False)
        db.query(User).filter(User.id == user_id).delete(synchronize_session=False)

    else:
        logger.info(f"Ignoring webhook event: type={event_type}")
        return event_type

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Webhook applied: type={event_type}, user_id={user_id}")
    return event_type
