"""
Alert e-mails for scraper operators

Sent when the safety guard skips deactivation because a scrape came back
suspiciously small. Without SMTP configuration the alert is logged instead.
"""

import logging
import smtplib
from datetime import datetime, timezone
from email.message import EmailMessage

from jobboard.config import Settings

logger = logging.getLogger(__name__)

SUBJECT_PREFIX = "[Job Board Alert]"


class AlertSender:
    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def configured(self) -> bool:
        return bool(self.settings.smtp_host and self.settings.alert_email_to)

    def send(self, subject: str, body: str) -> bool:
        """
        Send an alert e-mail.

        Returns:
            True if the message was handed to the SMTP server
        """
        if not self.configured:
            logger.warning(f"Alert (not sent, SMTP not configured): {subject}\n{body}")
            return False

        message = EmailMessage()
        message["Subject"] = f"{SUBJECT_PREFIX} {subject}"
        message["From"] = self.settings.alert_email_from
        message["To"] = self.settings.alert_email_to
        message.set_content(body)

        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=30) as smtp:
                if self.settings.smtp_port != 25:
                    smtp.starttls()
                if self.settings.smtp_user:
                    smtp.login(self.settings.smtp_user, self.settings.smtp_password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send alert email: {e}")
            return False

        logger.info(f"Alert sent to {self.settings.alert_email_to}: {subject}")
        return True

    def send_low_job_count_alert(self, employer_name: str, found_count: int, active_count: int) -> bool:
        body = "\n".join([
            "LOW JOB COUNT ALERT",
            "",
            f"Employer: {employer_name}",
            f"Jobs found in scrape: {found_count}",
            f"Active jobs in DB: {active_count}",
            f"Time: {datetime.now(timezone.utc).isoformat()}",
            "",
            "Safety guard activated: job deactivation was skipped.",
            "Existing jobs stay active until this is investigated.",
            "",
            "Possible causes: source site down, page or API structure changed,",
            "rate limiting or IP blocking, authentication wall, scraper bug.",
        ])
        return self.send(f"Low Job Count: {employer_name}", body)
