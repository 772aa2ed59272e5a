from shared.config import BaseServiceConfig


class Settings(BaseServiceConfig):
    # Upstream metering service
    metering_base_url: str = "http://localhost:8080"
    metering_timeout_seconds: float = 5.0

    # Polling cadence
    total_poll_interval_seconds: float = 1.0
    # Optional per-period cadence for total views, e.g. {"year": 60}
    total_poll_interval_overrides: dict[str, float] = {}
    realtime_poll_interval_seconds: float = 1.0

    # Selections / windowing
    default_period: str = "day"
    realtime_window_capacity: int = 60

    # HTTP API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    service_name: str = "dashboard"


settings = Settings()
