from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .analytics.mysql_analytics_repository import MySQLAnalyticsRepository
from .analytics.repository import AnalyticsRepository
from .analytics.service import AnalyticsService
from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.repository import AssignmentRepository
from .assignments.service import AssignmentService
from .buses.mysql_bus_repository import MySQLBusRepository
from .buses.repository import BusRepository
from .buses.service import BusService
from .database.connection import DBConfig, DatabaseConnection
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .profiles.service import AuthService, ProfileService
from .whitelist.mysql_whitelist_repository import MySQLWhitelistRepository
from .whitelist.repository import WhitelistRepository
from .whitelist.service import WhitelistService


@dataclass(frozen=True)
class Container:
    profiles_repo: ProfileRepository
    whitelist_repo: WhitelistRepository
    buses_repo: BusRepository
    assignments_repo: AssignmentRepository
    announcements_repo: AnnouncementRepository
    analytics_repo: AnalyticsRepository

    auth_service: AuthService
    profile_service: ProfileService
    whitelist_service: WhitelistService
    bus_service: BusService
    assignment_service: AssignmentService
    announcement_service: AnnouncementService
    analytics_service: AnalyticsService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    profiles_repo: ProfileRepository,
    whitelist_repo: WhitelistRepository,
    buses_repo: BusRepository,
    assignments_repo: AssignmentRepository,
    announcements_repo: AnnouncementRepository,
    analytics_repo: AnalyticsRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build every service on top of the given repositories (MySQL or in-memory)."""
    return Container(
        conn=conn,
        profiles_repo=profiles_repo,
        whitelist_repo=whitelist_repo,
        buses_repo=buses_repo,
        assignments_repo=assignments_repo,
        announcements_repo=announcements_repo,
        analytics_repo=analytics_repo,
        auth_service=AuthService(profiles_repo),
        profile_service=ProfileService(profiles_repo),
        whitelist_service=WhitelistService(whitelist_repo, profiles_repo),
        bus_service=BusService(buses_repo),
        assignment_service=AssignmentService(assignments_repo, profiles_repo, buses_repo),
        announcement_service=AnnouncementService(announcements_repo),
        analytics_service=AnalyticsService(analytics_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    return wire_services(
        conn=conn,
        profiles_repo=MySQLProfileRepository(conn),
        whitelist_repo=MySQLWhitelistRepository(conn),
        buses_repo=MySQLBusRepository(conn),
        assignments_repo=MySQLAssignmentRepository(conn),
        announcements_repo=MySQLAnnouncementRepository(conn),
        analytics_repo=MySQLAnalyticsRepository(conn),
    )
