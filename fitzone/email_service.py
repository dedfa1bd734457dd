"""
Transactional email via Resend, rendered from MJML templates
"""

import logging
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from .config import EMAIL_FROM_ADDRESS, RESEND_API_KEY
from .email_templates import (
    order_confirmation_template,
    password_reset_template,
    welcome_template,
)

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


class EmailNotConfigured(Exception):
    pass


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    result = mjml_to_html(mjml_content)
    # mjml_to_html returns a dict-like result with 'html' and 'errors' keys
    if result.get("errors"):
        logger.warning(f"MJML compilation warnings: {result['errors']}")
    return result.get("html", "")


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
) -> dict:
    """
    Send an email through Resend

    Raises:
        EmailNotConfigured: RESEND_API_KEY is missing
    """
    if not RESEND_API_KEY:
        raise EmailNotConfigured("RESEND_API_KEY missing")

    recipients = [to] if isinstance(to, str) else to
    html_content = compile_mjml_to_html(mjml_content)

    logger.info(f"📧 Sending email via Resend to: {recipients}")
    response = resend.Emails.send(
        {
            "from": from_address or EMAIL_FROM_ADDRESS,
            "to": recipients,
            "subject": subject,
            "html": html_content,
        }
    )
    logger.info(f"✅ Email sent successfully via Resend: {response}")
    return response


async def send_welcome_email(to: str, user_name: str) -> dict:
    return await send_email(to, "Welcome to FitZone 💪", welcome_template(user_name))


async def send_password_reset_email(to: str, reset_link: str) -> dict:
    return await send_email(to, "Reset Your Password - FitZone", password_reset_template(reset_link))


async def send_order_confirmation_email(
    to: str, customer_name: str, order_number: str, items: list[dict], total_amount: float
) -> dict:
    return await send_email(
        to,
        f"Order {order_number} confirmed - FitZone Store",
        order_confirmation_template(customer_name, order_number, items, total_amount),
    )


async def deliver(coro) -> bool:
    """Await an email coroutine; failures are logged, never raised to the caller"""
    try:
        await coro
        return True
    except EmailNotConfigured:
        coro_name = getattr(coro, "__name__", "email")
        logger.warning(f"⚠️ Email skipped ({coro_name}): no email service configured")
    except Exception as e:
        logger.error(f"❌ Email delivery failed: {e}")
    return False
