from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DeliveryResult:
    delivered: bool
    error: Optional[str] = None


class INotificationSender(ABC):
    """Out-of-band delivery of password reset codes - application layer"""

    @abstractmethod
    async def send_reset_code(self, email: str, code: str) -> DeliveryResult:
        """Deliver a reset code. Failures are reported, not raised."""
        pass
