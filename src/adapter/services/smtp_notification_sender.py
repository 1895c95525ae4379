import asyncio
import logging
import smtplib
from email.message import EmailMessage

from src.adapter.services.reset_code_email import build_reset_code_message
from src.app.services.notification_sender import DeliveryResult, INotificationSender

logger = logging.getLogger(__name__)


class SmtpNotificationSender(INotificationSender):
    """Delivers reset codes over SMTP (STARTTLS + login when credentials are set)"""

    def __init__(
        self,
        host: str,
        port: int,
        username: str = "",
        password: str = "",
        sender: str = "",
        use_tls: bool = True,
        timeout: float = 10,
        code_ttl_minutes: int = 10,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.use_tls = use_tls
        self.timeout = timeout
        self.code_ttl_minutes = code_ttl_minutes

    @classmethod
    def from_config(cls, config) -> "SmtpNotificationSender":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USERNAME,
            password=config.SMTP_PASSWORD,
            sender=config.EMAIL_FROM,
            use_tls=config.SMTP_USE_TLS,
            timeout=config.SMTP_TIMEOUT,
            code_ttl_minutes=config.OTP_TTL_MINUTES,
        )

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(message)

    async def send_reset_code(self, email: str, code: str) -> DeliveryResult:
        if not self.host or not self.sender:
            logger.warning("SMTP is not configured, cannot send reset code")
            return DeliveryResult(delivered=False, error="SMTP is not configured")

        message = build_reset_code_message(
            sender=self.sender,
            recipient=email,
            code=code,
            expires_in_minutes=self.code_ttl_minutes,
        )
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"Failed to send reset code email: {exc}")
            return DeliveryResult(delivered=False, error=str(exc))

        logger.info("Reset code email sent")
        return DeliveryResult(delivered=True)
