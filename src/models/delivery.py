from dataclasses import dataclass
from datetime import datetime


@dataclass
class DeliveryAttempt:
    attempt_id: str
    event_id: str | None
    url: str
    status_code: int | None
    timestamp: datetime
    response_time_ms: float
    response_body: dict | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300
