from __future__ import annotations

from datetime import timedelta

from workdesk.domain.enums import RecurrenceKind, TaskStatus, UserRole
from workdesk.domain.filters import (
    FILTER_DUE_SOON,
    FILTER_OVERDUE,
    FILTER_RECURRING,
    TaskFilters,
    apply_filters,
    is_due_soon,
    is_effectively_overdue,
)
from workdesk.services.stats import (
    dashboard_stats,
    officer_stats,
    proposal_history,
    recurring_alerts,
    unread_proposals,
)

from fakes import NOW, make_task, make_user

YESTERDAY = NOW - timedelta(days=1)


def test_overdue_counts_agree_between_dashboard_and_officer_stats() -> None:
    officer = make_user("officer")
    late = make_task("t1", status=TaskStatus.IN_PROGRESS, due_date=YESTERDAY)

    assert dashboard_stats([late], None, NOW).overdue == 1
    assert officer_stats([officer], [late], NOW)[0].overdue == 1

    done = make_task("t1", status=TaskStatus.COMPLETED, due_date=YESTERDAY)

    assert dashboard_stats([done], None, NOW).overdue == 0
    assert officer_stats([officer], [done], NOW)[0].overdue == 0


def test_explicit_overdue_status_counts_even_before_due() -> None:
    task = make_task(status=TaskStatus.OVERDUE, due_date=NOW + timedelta(days=5))

    assert is_effectively_overdue(task, NOW)
    assert not is_due_soon(task, NOW)


def test_due_soon_window() -> None:
    assert is_due_soon(make_task(due_date=NOW + timedelta(days=3)), NOW)
    assert not is_due_soon(make_task(due_date=NOW + timedelta(days=3, seconds=1)), NOW)
    assert not is_due_soon(make_task(due_date=NOW + timedelta(days=1), status=TaskStatus.CANCELLED), NOW)


def test_dashboard_for_officer_counts_own_tasks_only() -> None:
    officer = make_user("officer")
    tasks = [
        make_task("t1", status=TaskStatus.PENDING, due_date=NOW + timedelta(days=1)),
        make_task("t2", status=TaskStatus.COMPLETED),
        make_task("t3", assignee_id="other"),
    ]

    stats = dashboard_stats(tasks, officer, NOW)

    assert (stats.total, stats.pending, stats.completed, stats.due_soon) == (2, 1, 1, 1)


def test_officer_stats_sorted_by_open_work() -> None:
    busy, idle = make_user("busy"), make_user("idle")
    boss = make_user("boss", UserRole.MANAGER)
    tasks = [
        make_task("t1", assignee_id="busy"),
        make_task("t2", assignee_id="busy", status=TaskStatus.IN_PROGRESS),
        make_task("t3", assignee_id="idle", status=TaskStatus.COMPLETED),
    ]

    stats = officer_stats([idle, boss, busy], tasks, NOW)

    assert [s.user.id for s in stats] == ["busy", "idle"]
    assert stats[0].todo == 2
    assert stats[1].completion_rate == 100


def test_filters_use_shared_predicates() -> None:
    tasks = [
        make_task("late", status=TaskStatus.IN_PROGRESS, due_date=YESTERDAY),
        make_task("soon", due_date=NOW + timedelta(days=2)),
        make_task("repeat", recurring=RecurrenceKind.WEEKLY, due_date=NOW + timedelta(days=30)),
    ]

    def ids(key: str) -> set[str]:
        return {t.id for t in apply_filters(tasks, TaskFilters(status=key), NOW)}

    assert ids(FILTER_OVERDUE) == {"late"}
    assert ids(FILTER_DUE_SOON) == {"soon"}
    assert ids(FILTER_RECURRING) == {"repeat"}
    assert ids(TaskStatus.IN_PROGRESS.value) == {"late"}


def test_search_matches_dispatch_number_and_orders_newest_first() -> None:
    older = make_task("t1", dispatch_number="128/CO-UP", created_at=NOW - timedelta(days=2))
    newer = make_task("t2", title="Co-UP follow up", created_at=NOW)
    other = make_task("t3", title="Unrelated")

    result = apply_filters([older, other, newer], TaskFilters(search="co-up"), NOW)

    assert [t.id for t in result] == ["t2", "t1"]


def test_proposal_views_and_recurring_alerts() -> None:
    manager = make_user("boss", UserRole.MANAGER)
    tasks = [
        make_task("t1", proposal="Need help", is_proposal_read=False),
        make_task("t2", proposal="Read already", is_proposal_read=True),
        make_task("t3", proposal="  "),
        make_task("t4", recurring=RecurrenceKind.MONTHLY, status=TaskStatus.COMPLETED),
        make_task("t5", recurring=RecurrenceKind.MONTHLY),
    ]

    assert [t.id for t in unread_proposals(tasks)] == ["t1"]
    assert [t.id for t in proposal_history(tasks)] == ["t1", "t2"]
    assert [t.id for t in recurring_alerts(tasks, manager)] == ["t5"]
    assert recurring_alerts(tasks, make_user("officer")) == []
