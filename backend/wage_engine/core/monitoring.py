import sentry_sdk

from wage_engine.core.config import settings


def configure_error_monitoring() -> None:
    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.env, traces_sample_rate=0.2)


def report_unavailable(exc: BaseException) -> None:
    # Only storage outages are operational alerts; domain errors are normal control flow.
    if settings.sentry_dsn:
        sentry_sdk.capture_exception(exc)
