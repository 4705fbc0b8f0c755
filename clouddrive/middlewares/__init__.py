from clouddrive.middlewares.sentry import init_sentry, scrub_event, drop_health_transactions

__all__ = ["init_sentry", "scrub_event", "drop_health_transactions"]
