"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from pvz_store.adapters.supabase_pvz_repository import SupabasePvzRepository
from pvz_store.adapters.supabase_user_repository import SupabaseUserRepository
from pvz_store.config import Settings
from pvz_store.security import JwtCodec, PasswordHasher
from pvz_store.services.auth import AuthService, UserRepository
from pvz_store.services.pvz import PvzService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    pvz_service: PvzService
    auth_service: AuthService


def build_auth_service(settings: Settings, repository: UserRepository) -> AuthService:
    """Create the auth service with token and password settings applied."""
    return AuthService(
        repository=repository,
        tokens=JwtCodec(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(hours=settings.jwt_ttl_hours),
        ),
        hasher=PasswordHasher(rounds=settings.password_hash_rounds),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return AppContainer(
        settings=resolved_settings,
        pvz_service=PvzService(SupabasePvzRepository(supabase_client)),
        auth_service=build_auth_service(
            resolved_settings, SupabaseUserRepository(supabase_client)
        ),
    )
