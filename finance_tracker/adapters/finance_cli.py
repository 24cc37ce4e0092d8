"""CLI adapter running the interactive finance tracker.

This module wires the console application to the configured repository
and notification dispatcher and provides the ``finance-tracker`` entry
point.
"""

from finance_tracker.adapters.cli.console_app import ConsoleApp
from finance_tracker.application.use_cases.authentication import Session
from finance_tracker.infrastructure.container import (
    build_auth_service,
    build_export_use_case,
    build_finance_service,
    build_import_use_case,
    build_notification_service,
    build_settings,
    build_user_repository,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run the console application until the user exits."""
    logger = get_app_logger()
    settings = build_settings()
    repository = build_user_repository(settings)
    session = Session()
    finance_service = build_finance_service(
        session,
        build_notification_service(settings),
        settings,
    )
    app = ConsoleApp(
        auth_service=build_auth_service(repository),
        finance_service=finance_service,
        export_use_case=build_export_use_case(finance_service),
        import_use_case=build_import_use_case(finance_service),
        currency=settings.currency,
        warning_threshold=settings.budget_warning_threshold,
        logger=logger,
    )
    logger.info(f"Starting console application ({settings.backend} backend)")
    try:
        app.run()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        build_auth_service(repository).save_all(session)


if __name__ == "__main__":  # pragma: no cover
    main()
