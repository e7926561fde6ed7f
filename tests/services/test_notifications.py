"""Tests for the toast notification channel."""

import asyncio

import pytest

from tasklite.models import ToastSeverity
from tasklite.services.notifications import NotificationChannel


class TestNotificationChannel:
    @pytest.mark.asyncio
    async def test_toast_removed_after_duration(self):
        channel = NotificationChannel()

        channel.success("Project created", duration_ms=100)
        assert [t.message for t in channel.toasts] == ["Project created"]

        await asyncio.sleep(0.15)
        assert channel.toasts == []

    @pytest.mark.asyncio
    async def test_default_duration(self):
        channel = NotificationChannel(default_duration_ms=1234)
        toast = channel.warning("Task updated")

        assert toast.duration_ms == 1234
        assert toast.severity is ToastSeverity.WARNING
        channel.close()

    @pytest.mark.asyncio
    async def test_toasts_stack_in_order(self):
        channel = NotificationChannel()
        channel.success("one")
        channel.error("two")

        assert [(t.message, t.severity) for t in channel.toasts] == [
            ("one", ToastSeverity.SUCCESS),
            ("two", ToastSeverity.ERROR),
        ]
        assert len({t.id for t in channel.toasts}) == 2
        channel.close()

    @pytest.mark.asyncio
    async def test_dismiss_early_cancels_timer(self):
        channel = NotificationChannel()
        seen = []
        channel.subscribe(lambda toasts: seen.append(len(toasts)))

        toast = channel.success("bye", duration_ms=50)
        channel.dismiss(toast.id)
        await asyncio.sleep(0.08)

        assert seen == [1, 0]

    @pytest.mark.asyncio
    async def test_close_cancels_pending_removals(self):
        channel = NotificationChannel()
        channel.success("stays", duration_ms=50)

        channel.close()
        await asyncio.sleep(0.08)

        assert [t.message for t in channel.toasts] == ["stays"]

    def test_push_without_loop_keeps_toast(self):
        channel = NotificationChannel()
        channel.error("no loop")

        assert [t.message for t in channel.toasts] == ["no loop"]

    def test_unsubscribe(self):
        channel = NotificationChannel()
        seen = []
        unsubscribe = channel.subscribe(seen.append)
        unsubscribe()

        channel.success("quiet")
        assert seen == []
