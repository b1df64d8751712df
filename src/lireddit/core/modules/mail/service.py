import asyncio
import smtplib
from email.message import EmailMessage

import structlog

from lireddit.core.core import Service
from lireddit.errors import InfrastructureError

logger = structlog.get_logger(__name__)


class MailService(Service):
    """Delivers HTML emails over SMTP. Without an SMTP host, only the recipient and subject are logged."""

    async def send_email(self, to: str, html: str, subject: str) -> None:
        """Send an email. Delivery is not confirmed beyond the SMTP server accepting it.

        Raises:
            InfrastructureError: If the SMTP exchange fails
        """
        config = self.core.config
        if config.smtp_host is None:
            logger.info("email_not_sent_smtp_disabled", to=to, subject=subject)
            return

        message = EmailMessage()
        message["From"] = config.mail_from
        message["To"] = to
        message["Subject"] = subject
        message.set_content(html, subtype="html")

        try:
            await asyncio.to_thread(self._deliver, config.smtp_host, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.exception("email_send_failed", to=to, subject=subject)
            raise InfrastructureError("Failed to send email") from e
        logger.info("email_sent", to=to, subject=subject)

    def _deliver(self, host: str, message: EmailMessage) -> None:
        config = self.core.config
        with smtplib.SMTP(host, config.smtp_port, timeout=30) as smtp:
            if config.smtp_use_tls:
                smtp.starttls()
            if config.smtp_username and config.smtp_password:
                smtp.login(config.smtp_username, config.smtp_password)
            smtp.send_message(message)
