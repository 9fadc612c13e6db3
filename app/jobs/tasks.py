"""Background job tasks"""

from datetime import datetime
from typing import Optional
from uuid import UUID
import asyncio
import structlog

from app.jobs.celery_app import celery_app
from app.config import settings

logger = structlog.get_logger()


def run_async(coro):
    """Helper to run async functions in sync context

    Pooled connections belong to the loop that opened them, so the pool is
    emptied before each loop closes.
    """
    async def _run():
        from app.database import engine

        try:
            return await coro
        finally:
            await engine.dispose()

    return asyncio.run(_run())


def send_sms(to: str, body: str) -> Optional[str]:
    """Send an SMS through Twilio, returning the message SID"""
    from twilio.rest import Client as TwilioClient

    if not settings.twilio_configured:
        logger.warning("Twilio not configured, SMS skipped", to=to[-4:])
        return None

    client = TwilioClient(settings.twilio_account_sid, settings.twilio_auth_token)
    message = client.messages.create(
        body=body,
        from_=settings.twilio_phone_number,
        to=to,
    )
    return message.sid


def reservation_confirmed_message(reservation) -> str:
    message = f"Your reservation at {settings.restaurant_name} is confirmed! "
    message += f"{reservation.guests} guests on "
    message += f"{reservation.reservation_date.strftime('%A, %B %d')} at {reservation.reservation_time}. "
    message += f"Confirmation code: {reservation.confirmation_code}."
    return message


def reservation_cancelled_message(reservation) -> str:
    message = f"Your reservation at {settings.restaurant_name} "
    message += f"({reservation.confirmation_code}) on "
    message += f"{reservation.reservation_date.strftime('%A, %B %d')} at {reservation.reservation_time} "
    message += "has been cancelled."
    return message


async def _notify(reservation_id: str, confirmed: bool):
    from app.database import SessionLocal
    from app.models.reservation import Reservation
    from sqlalchemy import select

    async with SessionLocal() as db:
        result = await db.execute(
            select(Reservation).where(Reservation.id == UUID(reservation_id))
        )
        reservation = result.scalar_one_or_none()

        if not reservation:
            logger.warning("Reservation not found for notification", reservation_id=reservation_id)
            return

        if not reservation.phone:
            logger.info("No phone number on reservation, notification skipped", reservation_id=reservation_id)
            return

        if confirmed:
            body = reservation_confirmed_message(reservation)
        else:
            body = reservation_cancelled_message(reservation)

        try:
            sid = send_sms(reservation.phone, body)
        except Exception as e:
            logger.error(
                "Failed to send reservation SMS",
                reservation_id=reservation_id,
                error=str(e),
            )
            return

        if sid and confirmed:
            reservation.confirmation_sent = datetime.utcnow()
            await db.commit()

        logger.info("Reservation SMS sent", reservation_id=reservation_id, confirmed=confirmed)


@celery_app.task(name="notify_reservation_confirmed")
def notify_reservation_confirmed(reservation_id: str):
    """Text the guest their confirmation code"""
    logger.info("Sending reservation confirmation", reservation_id=reservation_id)
    run_async(_notify(reservation_id, confirmed=True))


@celery_app.task(name="notify_reservation_cancelled")
def notify_reservation_cancelled(reservation_id: str):
    """Text the guest that their reservation was cancelled"""
    logger.info("Sending reservation cancellation", reservation_id=reservation_id)
    run_async(_notify(reservation_id, confirmed=False))


@celery_app.task(name="record_activity")
def record_activity(
    actor_email: str,
    action: str,
    details: str = "",
    resource_type: Optional[str] = None,
    resource_id: Optional[str] = None,
):
    """Append an entry to the activity log"""

    async def _record():
        from app.database import SessionLocal
        from app.models.activity import ActivityLog

        async with SessionLocal() as db:
            db.add(ActivityLog(
                actor_email=actor_email,
                action=action,
                details=details,
                resource_type=resource_type,
                resource_id=resource_id,
            ))
            await db.commit()

    try:
        run_async(_record())
    except Exception as e:
        logger.error("Activity log error", action=action, actor=actor_email, error=str(e))


@celery_app.task(name="expire_pending_reservations")
def expire_pending_reservations():
    """Cancel deposit holds that were never paid"""
    logger.info("Expiring pending reservations")

    async def _expire():
        from app.database import SessionLocal
        from app.services.reservations import expire_stale_reservations

        async with SessionLocal() as db:
            expired = await expire_stale_reservations(db)
            logger.info("Expired pending reservations", expired_count=expired)

    run_async(_expire())
