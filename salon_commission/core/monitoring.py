import sentry_sdk

from salon_commission.core.config import Settings, settings


def configure_error_monitoring(config: Settings = settings) -> bool:
    """Start Sentry when a DSN is configured. Returns whether it was started."""
    if not config.sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=config.sentry_dsn,
        environment=config.env,
        release=f"salon-commission@{config.app_version}",
        traces_sample_rate=config.sentry_traces_sample_rate,
        send_default_pii=False,
    )
    sentry_sdk.set_tag("service", "salon-commission")
    return True
