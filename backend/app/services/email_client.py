# Client for the resend.com transactional email API
import httpx
import logging
from app.core.config import settings
from app.core.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


class EmailClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        sender: str | None = None,
        reply_to: str | None = None,
        timeout: float = 20,
        transport=None,
    ):
        self.api_key = api_key or settings.RESEND_API_KEY
        self.base_url = base_url or settings.RESEND_BASE_URL
        self.sender = sender or settings.EMAIL_FROM
        self.reply_to = reply_to or settings.EMAIL_REPLY_TO
        self.timeout = timeout
        self.transport = transport

    async def send(self, to: str, subject: str, html: str) -> str:
        """Send one HTML email and return the provider's message id."""
        if not self.api_key:
            raise EmailDeliveryError("RESEND_API_KEY is not configured")

        logger.info(f"RESEND API CALLED: send ({subject!r})")
        payload = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "html": html,
            "reply_to": self.reply_to,
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            res = await client.post(
                f"{self.base_url}/emails",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )

        if res.is_error:
            logger.error(f"Resend error {res.status_code}: {res.text}")
            raise EmailDeliveryError(f"Email API returned {res.status_code}: {res.text}")

        data = res.json()
        message_id = data.get("id")
        if not message_id:
            raise EmailDeliveryError(f"Email API response has no message id: {data}")
        return message_id
