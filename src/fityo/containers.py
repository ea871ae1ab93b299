"""Dependency container wiring for the application."""

import logging
from dataclasses import dataclass

from supabase import create_client

from fityo.adapters.local_repositories import (
    LocalAuthProvider,
    LocalFoodLibraryRepository,
    LocalFoodLogRepository,
    LocalPlannerStateRepository,
    LocalWeightRepository,
)
from fityo.adapters.local_store import LocalStateStore
from fityo.adapters.supabase_auth_provider import SupabaseAuthProvider
from fityo.adapters.supabase_food_library_repository import (
    SupabaseFoodLibraryRepository,
)
from fityo.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from fityo.adapters.supabase_planner_state_repository import (
    SupabasePlannerStateRepository,
)
from fityo.adapters.supabase_weight_repository import SupabaseWeightRepository
from fityo.config import Settings, require_supabase_credentials
from fityo.services.auth import AuthProvider, AuthService
from fityo.services.clock import Clock, ZoneClock
from fityo.services.dashboard import DashboardService
from fityo.services.food_logs import FoodLogRepository, FoodLogService
from fityo.services.history import HistoryService
from fityo.services.library import FoodLibraryRepository, FoodLibraryService
from fityo.services.planner import DayPlanService, PlannerStateRepository
from fityo.services.weights import WeightRepository, WeightService

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """One implementation of every storage port."""

    auth_provider: AuthProvider
    foods: FoodLibraryRepository
    logs: FoodLogRepository
    weights: WeightRepository
    planner: PlannerStateRepository


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    auth_service: AuthService
    food_library_service: FoodLibraryService
    food_log_service: FoodLogService
    weight_service: WeightService
    day_plan_service: DayPlanService
    dashboard_service: DashboardService
    history_service: HistoryService


def build_repositories(settings: Settings) -> Repositories:
    """Create the storage adapters selected by ``storage_backend``."""
    if settings.storage_backend == "local":
        store = LocalStateStore(settings.local_state_path)
        return Repositories(
            auth_provider=LocalAuthProvider(
                user_id=settings.local_user_id,
                access_token=settings.local_access_token,
            ),
            foods=LocalFoodLibraryRepository(store),
            logs=LocalFoodLogRepository(store),
            weights=LocalWeightRepository(store),
            planner=LocalPlannerStateRepository(store),
        )
    url, key = require_supabase_credentials(settings)
    client = create_client(url, key)
    return Repositories(
        auth_provider=SupabaseAuthProvider(client),
        foods=SupabaseFoodLibraryRepository(client),
        logs=SupabaseFoodLogRepository(client),
        weights=SupabaseWeightRepository(client),
        planner=SupabasePlannerStateRepository(client),
    )


def build_services(
    settings: Settings, repositories: Repositories, clock: Clock
) -> AppContainer:
    """Wire services on top of a set of repositories."""
    food_log_service = FoodLogService(repositories.logs, clock)
    weight_service = WeightService(repositories.weights, clock)
    day_plan_service = DayPlanService(
        repository=repositories.planner,
        food_logs=food_log_service,
        clock=clock,
    )
    return AppContainer(
        settings=settings,
        clock=clock,
        auth_service=AuthService(repositories.auth_provider),
        food_library_service=FoodLibraryService(repositories.foods),
        food_log_service=food_log_service,
        weight_service=weight_service,
        day_plan_service=day_plan_service,
        dashboard_service=DashboardService(
            planner=day_plan_service,
            food_logs=food_log_service,
            clock=clock,
        ),
        history_service=HistoryService(
            food_logs=food_log_service,
            weights=weight_service,
            clock=clock,
        ),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    logger.info("Using %s storage backend", resolved_settings.storage_backend)
    return build_services(
        resolved_settings,
        build_repositories(resolved_settings),
        ZoneClock(resolved_settings.timezone),
    )
