from prometheus_client import Counter, Histogram, Info
from prometheus_fastapi_instrumentator import Instrumentator

# Business metrics
charging_profile_requests = Counter(
    "charging_profile_requests_total",
    "Total number of charging profile requests",
    ["service", "endpoint", "status"],  # status=ok/invalid/error
)

build_duration_seconds = Histogram(
    "charging_profile_build_duration_seconds",
    "Time spent building a charging schedule",
    ["service"],
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1],
)

reached_percentage = Histogram(
    "charging_profile_reached_percentage",
    "State of charge reached at leaving time",
    ["service"],
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

schedule_intervals = Histogram(
    "charging_profile_schedule_intervals",
    "Number of intervals in a returned schedule",
    ["service"],
    buckets=[1, 2, 3, 5, 8, 13, 21],
)

# Application info
app_info = Info("charging_profile_app_info", "Application information")


def setup_instrumentator() -> Instrumentator:
    return Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_respect_env_var=False,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics", "/api/v1/health"],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )


def init_app_info(version: str = "1.0.0"):
    app_info.info(
        {"version": version, "service": "charging-profile", "component": "api"}
    )


class MetricsCollector:
    SERVICE_NAME = "charging-profile"

    @staticmethod
    def record_request(endpoint: str, status: str):
        charging_profile_requests.labels(
            service=MetricsCollector.SERVICE_NAME, endpoint=endpoint, status=status
        ).inc()

    @staticmethod
    def record_schedule(duration: float, percentage: int, intervals: int):
        build_duration_seconds.labels(service=MetricsCollector.SERVICE_NAME).observe(
            duration
        )
        reached_percentage.labels(service=MetricsCollector.SERVICE_NAME).observe(
            percentage
        )
        schedule_intervals.labels(service=MetricsCollector.SERVICE_NAME).observe(
            intervals
        )
