from threading import Thread
import logging
import requests
from flask import current_app

logger = logging.getLogger(__name__)


def send_sms(contact, message, api_url=None, api_key=None, timeout=10) -> bool:
    """Single delivery attempt. Never raises; returns whether the provider accepted it."""
    if not contact:
        logger.warning("SMS not sent: no contact number")
        return False
    if not api_key:
        logger.warning(f"SMS not sent to {contact}: SMS_API_KEY is not configured")
        return False

    try:
        res = requests.post(
            api_url,
            json={"apiKey": api_key, "to": contact, "message": message},
            timeout=timeout,
        )
        res.raise_for_status()
        body = res.json()
        if body.get("success"):
            logger.info(f"SMS sent to {contact}")
            return True
        logger.error(f"Failed to send SMS to {contact}: {body.get('error')}")
        return False
    except (requests.RequestException, ValueError) as e:
        logger.error(f"SMS send error for {contact}: {e}")
        return False


def send_async_sms(app, contact, message):
    with app.app_context():
        send_sms(
            contact,
            message,
            api_url=app.config.get("SMS_API_URL"),
            api_key=app.config.get("SMS_API_KEY"),
        )


def dispatch_sms(contact, message):
    """Fire-and-forget delivery; the caller never waits on the provider."""
    app = current_app._get_current_object()

    # If in testing mode, log the SMS instead of sending it
    if app.testing:
        app.logger.info("--- MOCK SMS ---")
        app.logger.info(f"To: {contact}")
        app.logger.info(f"Body: {message}")
        app.logger.info("--- END MOCK SMS ---")
        return None

    thread = Thread(target=send_async_sms, args=(app, contact, message), daemon=True)
    thread.start()
    return thread


def deliver_otp(registration, code):
    """Log the code as the fallback channel, then hand it to the SMS provider."""
    minutes = current_app.config.get("OTP_EXPIRY_MINUTES")
    contact = registration.profile.contact if registration.profile else None

    if not contact:
        current_app.logger.info(
            f"OTP for registration {registration.id} -> {code} (no phone on profile)"
        )
        return None

    current_app.logger.info(f"OTP for {contact} (registration {registration.id}): {code}")
    return dispatch_sms(
        contact, f"Your registration OTP is {code}. It expires in {minutes} minutes."
    )
