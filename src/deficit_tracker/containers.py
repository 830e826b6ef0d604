"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from deficit_tracker.adapters.supabase_ledger_repository import (
    SupabaseLedgerRepository,
)
from deficit_tracker.adapters.supabase_notification_repository import (
    SupabaseNotificationRepository,
)
from deficit_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from deficit_tracker.adapters.supabase_progress_repository import (
    SupabaseProgressRepository,
)
from deficit_tracker.config import Settings
from deficit_tracker.services.clock import SystemClock
from deficit_tracker.services.commands import CommandDispatcher
from deficit_tracker.services.ledger import EntryLedgerService
from deficit_tracker.services.notifications import NotificationService
from deficit_tracker.services.profiles import ProfileService
from deficit_tracker.services.progress import ProgressService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    ledger_service: EntryLedgerService
    command_dispatcher: CommandDispatcher
    progress_service: ProgressService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(
        supabase_client, default_timezone=resolved_settings.default_timezone
    )
    ledger_repository = SupabaseLedgerRepository(supabase_client)
    progress_repository = SupabaseProgressRepository(supabase_client)
    notification_repository = SupabaseNotificationRepository(supabase_client)
    profile_service = ProfileService(profile_repository)
    ledger_service = EntryLedgerService(
        repository=ledger_repository,
        notifications=NotificationService(notification_repository),
    )
    progress_service = ProgressService(
        profiles=profile_service,
        repository=progress_repository,
        clock=SystemClock(),
    )
    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        ledger_service=ledger_service,
        command_dispatcher=CommandDispatcher(ledger_service),
        progress_service=progress_service,
    )
