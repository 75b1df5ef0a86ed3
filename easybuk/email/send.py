"""
Transactional email for EasyBuk.

send_* functions are fire-and-forget: they log on failure but never raise,
so an email outage never breaks signup or verification.  Intended for
FastAPI BackgroundTasks.
"""
from __future__ import annotations

import html
import logging

from easybuk.config import Settings
from easybuk.email import smtp

logger = logging.getLogger(__name__)


async def _deliver(
    to_email: str,
    to_name: str,
    subject: str,
    body: str,
    settings: Settings,
) -> bool:
    if not smtp.is_configured(settings):
        logger.warning("SMTP not configured; skipping email to %s", to_email)
        return False
    if await smtp.deliver(to_email, to_name, subject, body, settings):
        logger.info("Sent '%s' to %s", subject, to_email)
        return True
    logger.warning("Email '%s' to %s was not delivered", subject, to_email)
    return False


def verification_url(settings: Settings, token: str) -> str:
    return f"{settings.app_base_url.rstrip('/')}/auth/verify-email?token={token}"


async def send_email_verification(
    to_email: str,
    name: str,
    verify_url: str,
    settings: Settings,
) -> None:
    safe_name = html.escape(name)
    await _deliver(
        to_email,
        name,
        "Verify your email address - EasyBuk",
        f"<p>Hi {safe_name},</p>"
        "<p>Thanks for signing up to EasyBuk. Confirm your email address to "
        "start booking and offering services.</p>"
        f"<p style='margin-top:24px'><a href='{verify_url}' "
        "style='background:#16a34a;color:#fff;padding:12px 24px;border-radius:6px;"
        "text-decoration:none;font-weight:bold'>Verify email</a></p>"
        "<p style='color:#6b7280;font-size:13px'>This link expires in 24 hours. "
        "If you did not create an account, you can ignore this email.</p>",
        settings,
    )


async def send_admin_role_changed(
    to_email: str,
    name: str,
    granted: bool,
    settings: Settings,
) -> None:
    action = "granted" if granted else "removed"
    await _deliver(
        to_email,
        name,
        f"Administrator access {action} - EasyBuk",
        f"<p>Hi {html.escape(name)},</p>"
        f"<p>Administrator access to EasyBuk has been {action} for your account.</p>",
        settings,
    )
