from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta
from typing import Sequence

from workdesk.config import Settings, load_settings
from workdesk.domain.enums import TaskStatus
from workdesk.domain.errors import WorkdeskError
from workdesk.domain.filters import (
    FILTER_ALL,
    FILTER_DUE_SOON,
    FILTER_OVERDUE,
    FILTER_RECURRING,
    TaskFilters,
)
from workdesk.infra.cloud_config import CloudConfig, clear_cloud_config, save_cloud_config
from workdesk.infra.db import create_db_engine, create_schema
from workdesk.infra.logging import setup_logging
from workdesk.infra.store import Collection
from workdesk.infra.store_factory import open_store
from workdesk.services.clock import utcnow
from workdesk.services.notification_service import NotificationService
from workdesk.services.stats import dashboard_stats, officer_stats
from workdesk.services.task_service import TaskService
from workdesk.services.user_service import UserService

logger = logging.getLogger(__name__)

FILTER_CHOICES = [FILTER_ALL, FILTER_DUE_SOON, FILTER_OVERDUE, FILTER_RECURRING] + [
    status.value for status in TaskStatus if status != TaskStatus.OVERDUE
]


def _login(store, args: argparse.Namespace):
    user = UserService(store).login(args.username, args.password)
    if user is None:
        raise WorkdeskError("Login failed. Check your username and password.")
    return user


def _cmd_init_db(settings: Settings, args: argparse.Namespace) -> None:
    create_schema(create_db_engine(settings.database_url))
    print("Database schema is ready.")


def _cmd_stats(settings: Settings, args: argparse.Namespace) -> None:
    store = open_store(settings)
    viewer = _login(store, args)
    tasks = store.get_all(Collection.TASKS)
    now = utcnow()
    stats = dashboard_stats(tasks, viewer, now, timedelta(days=settings.due_soon_days))
    print(
        f"total={stats.total} pending={stats.pending} in_progress={stats.in_progress} "
        f"completed={stats.completed} overdue={stats.overdue} due_soon={stats.due_soon}"
    )
    if viewer.is_manager:
        for stat in officer_stats(store.get_all(Collection.USERS), tasks, now):
            print(
                f"{stat.user.full_name}: todo={stat.todo} overdue={stat.overdue} "
                f"completed={stat.completed}/{stat.total} ({stat.completion_rate}%)"
            )


def _cmd_tasks(settings: Settings, args: argparse.Namespace) -> None:
    store = open_store(settings)
    viewer = _login(store, args)
    filters = TaskFilters(
        status=args.filter,
        search=args.search,
        due_soon_window=timedelta(days=settings.due_soon_days),
    )
    for task in TaskService(store).list_tasks(filters, viewer=viewer):
        print(f"{task.id}\t{task.status.value}\t{task.due_date:%Y-%m-%d}\t{task.title}")


def _cmd_notifications(settings: Settings, args: argparse.Namespace) -> None:
    store = open_store(settings)
    viewer = _login(store, args)
    service = NotificationService(store)
    for notification in service.list_for_user(viewer.id):
        marker = " " if notification.is_read else "*"
        print(f"{marker} {notification.created_at:%Y-%m-%d %H:%M} {notification.title}: {notification.message}")
    if args.mark_read:
        service.mark_all_read(viewer.id)


def _cmd_cloud(settings: Settings, args: argparse.Namespace) -> None:
    if args.disconnect:
        clear_cloud_config(settings.cloud_config_path)
        print("Remote sync disabled.")
        return
    if not args.database_url:
        raise WorkdeskError("--database-url is required to enable remote sync.")
    config = CloudConfig(
        api_key=args.api_key,
        auth_domain=args.auth_domain,
        database_url=args.database_url,
        project_id=args.project_id,
        storage_bucket=args.storage_bucket,
        messaging_sender_id=args.messaging_sender_id,
        app_id=args.app_id,
    )
    save_cloud_config(settings.cloud_config_path, config)
    print(f"Remote sync configured for {config.database_url}.")


def _add_login_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="workdesk", description="Work-order tracking for managers and officers.")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="create database tables").set_defaults(handler=_cmd_init_db)

    stats = commands.add_parser("stats", help="dashboard counts")
    _add_login_args(stats)
    stats.set_defaults(handler=_cmd_stats)

    tasks = commands.add_parser("tasks", help="list visible tasks")
    _add_login_args(tasks)
    tasks.add_argument("--filter", default=FILTER_ALL, choices=FILTER_CHOICES)
    tasks.add_argument("--search")
    tasks.set_defaults(handler=_cmd_tasks)

    notifications = commands.add_parser("notifications", help="list your notifications")
    _add_login_args(notifications)
    notifications.add_argument("--mark-read", action="store_true")
    notifications.set_defaults(handler=_cmd_notifications)

    cloud = commands.add_parser("cloud", help="configure remote sync")
    cloud.add_argument("--disconnect", action="store_true")
    for name in ("api-key", "auth-domain", "database-url", "project-id", "storage-bucket", "messaging-sender-id", "app-id"):
        cloud.add_argument(f"--{name}", default="")
    cloud.set_defaults(handler=_cmd_cloud)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    setup_logging(settings)
    try:
        args.handler(settings, args)
    except WorkdeskError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
