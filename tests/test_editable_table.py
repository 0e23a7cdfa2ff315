# SPDX-License-Identifier: MIT

import asyncio
import unittest

from babylog.configuration import get_default_configuration
from babylog.edit.navigator import FEEDING_FIELD_ORDER, SLEEP_FIELD_ORDER, advance
from babylog.edit.table import (
    EditableTable,
    feeding_settings,
    settings_for,
    sleep_settings,
)
from babylog.model.edit import CommitStatus, EditTarget, ExitPolicy
from babylog.model.event import (
    CommitFailed,
    FocusRequested,
    HighlightCleared,
    HighlightStarted,
    Notice,
    NoticeLevel,
)
from babylog.model.table import Table
from babylog.service.list_cache import ListCache
from babylog.service.notifier import Notifier
from babylog.service.storage import TransportError

from fakes import EventLog, FakeStorage, make_feeding, make_sleep

WINDOW = 0.2
SETTLE = 0.05


class TestFeedingTable(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.notifier = Notifier()
        self.log = EventLog(self.notifier)
        self.storage = FakeStorage(
            Table.FEEDINGS,
            [make_feeding(7), make_feeding(8, feeding_type="bottle", amount=4.0)],
        )
        self.table = EditableTable(
            Table.FEEDINGS,
            self.storage,
            ListCache(self.notifier),
            self.notifier,
            feeding_settings()._replace(highlight_window=WINDOW),
        )
        await self.table.load()

    async def asyncTearDown(self) -> None:
        self.table.close()

    def notices(self) -> list[Notice]:
        return self.log.of_type(Notice)

    async def test_enter_commits_and_highlights(self) -> None:
        self.table.click(7, "duration")
        self.assertEqual(self.table.draft, "20")
        self.assertIsNone(self.table.change("45"))

        pending = self.table.enter(7, "duration")
        self.assertIsNotNone(pending)
        outcome = await pending.outcome()

        self.assertEqual(outcome.status, CommitStatus.SUCCEEDED)
        self.assertEqual(self.storage.updates, [(7, {"duration": 45})])
        self.assertTrue(self.table.tracker.is_idle)
        self.assertEqual(self.table.record(7)["duration"], 45)
        self.assertTrue(self.table.is_highlighted(7, "duration"))
        self.assertIn(
            Notice(NoticeLevel.SUCCESS, "Changes saved successfully"), self.notices()
        )

        await asyncio.sleep(WINDOW * 3)
        self.assertFalse(self.table.is_highlighted(7, "duration"))
        self.assertEqual(
            self.log.of_type(HighlightCleared),
            [HighlightCleared(Table.FEEDINGS, 7, "duration")],
        )

    async def test_commit_without_a_target(self) -> None:
        outcome = await self.table.pipeline.commit(8, "amount", "5.5")

        self.assertTrue(outcome.succeeded)
        self.assertEqual(outcome.value, 5.5)
        self.assertEqual(self.table.record(8)["amount"], 5.5)
        self.assertTrue(self.table.tracker.is_idle)

    async def test_first_enter_only_activates(self) -> None:
        self.assertIsNone(self.table.enter(7, "notes"))
        self.assertEqual(self.table.current_target, EditTarget(7, "notes"))
        self.assertEqual(self.storage.updates, [])

    async def test_select_commits_on_change(self) -> None:
        self.table.click(7, "feeding_type")
        pending = self.table.change("bottle")
        self.assertIsNotNone(pending)

        outcome = await pending.outcome()
        self.assertTrue(outcome.succeeded)
        self.assertEqual(self.table.record(7)["feeding_type"], "bottle")

    async def test_blur_commits(self) -> None:
        self.table.click(7, "notes")
        self.table.change("sleepy")
        pending = self.table.blur()

        self.assertIsNotNone(pending)
        await pending.outcome()
        self.assertEqual(self.table.record(7)["notes"], "sleepy")

    async def test_outside_click_commits_draft(self) -> None:
        self.table.click(7, "notes")
        self.table.change("fussy")
        self.table.outside_click()

        self.assertTrue(self.table.tracker.is_idle)
        await self.table.drain()
        self.assertEqual(self.storage.records[7]["notes"], "fussy")

    async def test_clicking_another_cell_commits_the_previous_one(self) -> None:
        self.table.click(7, "notes")
        self.table.change("fussy")
        self.table.click(8, "amount")

        self.assertEqual(self.table.current_target, EditTarget(8, "amount"))
        self.assertEqual(self.table.draft, "4")
        await self.table.drain()
        self.assertEqual(self.storage.updates, [(7, {"notes": "fussy"})])
        # The later target is left alone by the earlier commit resolving
        self.assertEqual(self.table.current_target, EditTarget(8, "amount"))

    async def test_tab_moves_in_field_order(self) -> None:
        self.table.click(7, "feeding_type")
        self.assertIsNone(self.table.tab())
        self.assertEqual(self.table.current_target, EditTarget(7, "duration"))
        self.assertEqual(self.table.draft, "20")

        self.table.change("30")
        pending = self.table.tab()
        self.assertEqual(self.table.current_target, EditTarget(7, "amount"))
        self.assertIsNotNone(pending)

        outcome = await pending.outcome()
        self.assertTrue(outcome.succeeded)
        self.assertEqual(self.storage.updates, [(7, {"duration": 30})])
        # The saved record leaves edit mode
        self.assertTrue(self.table.tracker.is_idle)
        self.assertEqual(
            [event.target for event in self.log.of_type(FocusRequested)],
            [EditTarget(7, "duration"), EditTarget(7, "amount")],
        )

    async def test_tab_wraps_around(self) -> None:
        self.table.click(7, "notes")
        self.table.tab()
        self.assertEqual(self.table.current_target, EditTarget(7, "feeding_type"))

    async def test_leaving_select_does_not_commit_it_again(self) -> None:
        self.table.click(7, "feeding_type")
        self.table.change("bottle")
        self.table.outside_click()

        await self.table.drain()
        self.assertEqual(self.storage.updates, [(7, {"feeding_type": "bottle"})])
        self.assertEqual(len(self.log.of_type(HighlightStarted)), 1)

    async def test_list_stays_usable_while_refreshing(self) -> None:
        self.storage.list_gate.clear()
        self.table.click(8, "notes")
        self.table.change("spit up")
        self.table.click(7, "duration")
        while self.storage.list_calls < 2:
            await asyncio.sleep(0.01)

        self.assertEqual([record["id"] for record in self.table.records], [7, 8])
        self.assertIsNone(self.table.record(8)["notes"])
        self.assertIsNone(self.table.tab())
        self.assertEqual(self.table.current_target, EditTarget(7, "amount"))

        self.storage.list_gate.set()
        await self.table.drain()
        self.assertEqual(self.table.record(8)["notes"], "spit up")

    async def test_tab_away_from_deleted_record(self) -> None:
        del self.storage.records[7]
        self.table.click(7, "duration")
        self.table.change("45")
        pending = self.table.tab()
        self.assertEqual(self.table.current_target, EditTarget(7, "amount"))

        outcome = await pending.outcome()

        self.assertEqual(outcome.status, CommitStatus.FAILED)
        self.assertTrue(self.table.tracker.is_idle)
        self.assertEqual([record["id"] for record in self.table.records], [8])
        self.assertIsNone(self.table.tab())

    async def test_tab_on_record_gone_from_list(self) -> None:
        del self.storage.records[7]
        self.table.click(8, "notes")
        self.table.change("spit up")
        self.table.click(7, "notes")
        await self.table.drain()
        self.assertEqual([record["id"] for record in self.table.records], [8])

        self.assertIsNone(self.table.tab())
        self.assertTrue(self.table.tracker.is_idle)
        self.assertIsNone(self.table.draft)

    async def test_saving_state_clears_when_update_raises(self) -> None:
        self.storage.update_error = RuntimeError("disk vanished")  # type: ignore[assignment]
        self.table.click(7, "duration")
        self.table.change("45")

        with self.assertRaises(RuntimeError):
            await self.table.enter(7, "duration").outcome()
        self.assertFalse(self.table.is_saving(7, "duration"))

    async def test_transport_error_leaves_value_unchanged(self) -> None:
        self.table.click(7, "duration")
        self.table.change("45")
        self.storage.update_error = TransportError("offline")

        outcome = await self.table.enter(7, "duration").outcome()

        self.assertEqual(outcome.status, CommitStatus.FAILED)
        self.assertEqual(outcome.message, "Failed to save changes")
        self.assertTrue(self.table.tracker.is_idle)
        self.assertEqual(self.table.record(7)["duration"], 20)
        self.assertFalse(self.table.is_highlighted(7, "duration"))
        self.assertEqual(len(self.log.of_type(CommitFailed)), 1)
        self.assertIn(
            Notice(NoticeLevel.ERROR, "Failed to save changes", "Error"),
            self.notices(),
        )

    async def test_missing_record_refreshes_list(self) -> None:
        del self.storage.records[7]
        self.table.click(7, "duration")
        self.table.change("45")

        outcome = await self.table.enter(7, "duration").outcome()

        self.assertEqual(outcome.status, CommitStatus.FAILED)
        self.assertEqual(self.storage.list_calls, 2)
        self.assertEqual([record["id"] for record in self.table.records], [8])

    async def test_unreadable_value_is_not_sent(self) -> None:
        self.table.click(7, "duration")
        self.table.change("a while")

        outcome = await self.table.enter(7, "duration").outcome()

        self.assertEqual(outcome.status, CommitStatus.FAILED)
        self.assertEqual(self.storage.updates, [])
        self.assertTrue(self.table.tracker.is_idle)

    async def test_create(self) -> None:
        created = await self.table.create(make_feeding(None, duration=15))

        self.assertIsNotNone(created)
        self.assertEqual(created["id"], 9)
        self.assertEqual(len(self.table.records), 3)
        self.assertIn(
            Notice(NoticeLevel.SUCCESS, "Feeding log added successfully", "Success"),
            self.notices(),
        )

    async def test_delete_after_confirmation(self) -> None:
        self.table.request_delete(7)
        self.assertEqual(self.table.delete_confirmation, 7)

        self.assertTrue(await self.table.confirm_delete())
        self.assertIsNone(self.table.delete_confirmation)
        self.assertEqual([record["id"] for record in self.table.records], [8])
        self.assertIn(
            Notice(NoticeLevel.SUCCESS, "Feeding log deleted successfully", "Success"),
            self.notices(),
        )

    async def test_delete_cancelled(self) -> None:
        self.table.request_delete(7)
        self.table.cancel_delete()

        self.assertFalse(await self.table.confirm_delete())
        self.assertIn(7, self.storage.records)

    async def test_delete_missing_record(self) -> None:
        self.table.request_delete(42)

        self.assertFalse(await self.table.confirm_delete())
        self.assertIn(
            Notice(NoticeLevel.ERROR, "Failed to delete feeding log", "Error"),
            self.notices(),
        )


class TestSleepTable(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.notifier = Notifier()
        self.log = EventLog(self.notifier)
        self.storage = FakeStorage(Table.SLEEP, [make_sleep(1), make_sleep(2)])
        self.table = EditableTable(
            Table.SLEEP,
            self.storage,
            ListCache(self.notifier),
            self.notifier,
            sleep_settings()._replace(settle_delay=SETTLE, highlight_window=WINDOW),
        )
        await self.table.load()

    async def asyncTearDown(self) -> None:
        self.table.close()

    async def test_only_last_value_is_sent(self) -> None:
        self.table.click(1, "notes")
        first = self.table.change("A")
        second = self.table.change("B")

        self.assertEqual((await first.outcome()).status, CommitStatus.CANCELLED)
        self.assertTrue((await second.outcome()).succeeded)
        self.assertEqual(self.storage.updates, [(1, {"notes": "B"})])

    async def test_outside_click_discards_pending_edit(self) -> None:
        self.table.click(1, "notes")
        pending = self.table.change("half typed")
        self.table.outside_click()

        self.assertEqual((await pending.outcome()).status, CommitStatus.CANCELLED)
        await self.table.drain()
        self.assertEqual(self.storage.updates, [])
        self.assertIsNone(self.storage.records[1]["notes"])
        self.assertTrue(self.table.tracker.is_idle)

    async def test_clicking_another_cell_discards_pending_edit(self) -> None:
        self.table.click(1, "notes")
        pending = self.table.change("half typed")
        self.table.click(2, "notes")

        self.assertEqual((await pending.outcome()).status, CommitStatus.CANCELLED)
        self.assertEqual(self.table.current_target, EditTarget(2, "notes"))
        self.assertEqual(self.storage.updates, [])

    async def test_escape_cancels_pending_edit(self) -> None:
        self.table.click(1, "sleep_type")
        pending = self.table.change("night")
        self.table.escape()

        self.assertEqual((await pending.outcome()).status, CommitStatus.CANCELLED)
        self.assertEqual(self.storage.updates, [])
        self.assertTrue(self.table.tracker.is_idle)
        self.assertIsNone(self.table.draft)

    async def test_blur_does_not_commit(self) -> None:
        self.table.click(1, "notes")
        self.assertIsNone(self.table.blur())

    async def test_clearing_end_time_reopens_sleep(self) -> None:
        self.table.click(2, "end_time")
        outcome = await self.table.change("").outcome()

        self.assertTrue(outcome.succeeded)
        self.assertIsNone(self.table.record(2)["end_time"])

    async def test_newer_value_waits_for_commit_in_flight(self) -> None:
        self.storage.gate.clear()
        self.table.click(1, "notes")
        first = self.table.change("A")
        while not self.storage.updates:
            await asyncio.sleep(0.01)

        second = self.table.change("B")
        self.assertFalse(first.cancel())
        await asyncio.sleep(SETTLE * 2)
        # Still only the first request outstanding
        self.assertEqual(self.storage.updates, [(1, {"notes": "A"})])

        self.storage.gate.set()
        self.assertTrue((await first.outcome()).succeeded)
        self.assertTrue((await second.outcome()).succeeded)
        self.assertEqual(
            self.storage.updates, [(1, {"notes": "A"}), (1, {"notes": "B"})]
        )
        self.assertEqual(self.table.record(1)["notes"], "B")

    async def test_saving_state_while_in_flight(self) -> None:
        self.storage.gate.clear()
        self.table.click(1, "notes")
        pending = self.table.change("A")
        while not self.storage.updates:
            await asyncio.sleep(0.01)

        self.assertTrue(self.table.is_saving(1, "notes"))
        self.storage.gate.set()
        await pending.outcome()
        self.assertFalse(self.table.is_saving(1, "notes"))


class TestTablesAreIndependent(unittest.IsolatedAsyncioTestCase):
    async def test_targets_do_not_interfere(self) -> None:
        notifier = Notifier()
        cache = ListCache(notifier)
        feedings = EditableTable(
            Table.FEEDINGS, FakeStorage(Table.FEEDINGS, [make_feeding(1)]), cache, notifier
        )
        sleeps = EditableTable(
            Table.SLEEP, FakeStorage(Table.SLEEP, [make_sleep(1)]), cache, notifier
        )
        await feedings.load()
        await sleeps.load()

        feedings.click(1, "notes")
        sleeps.click(1, "notes")

        self.assertEqual(feedings.current_target, EditTarget(1, "notes"))
        self.assertEqual(sleeps.current_target, EditTarget(1, "notes"))
        sleeps.escape()
        self.assertEqual(feedings.current_target, EditTarget(1, "notes"))
        feedings.close()
        sleeps.close()


class TestTableSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        feeding = feeding_settings()
        sleep = sleep_settings()

        self.assertEqual(feeding.settle_delay, 0)
        self.assertEqual(sleep.settle_delay, 0.5)
        self.assertEqual(feeding.highlight_window, 1.0)
        self.assertEqual(sleep.highlight_window, 1.0)
        self.assertEqual(feeding.exit_policy, ExitPolicy.COMMIT)
        self.assertEqual(sleep.exit_policy, ExitPolicy.DISCARD)

    def test_configured_delays(self) -> None:
        config = get_default_configuration()
        config["sleep_settle_delay_ms"] = 250
        config["highlight_window_ms"] = 2000

        settings = settings_for(Table.SLEEP, config)

        self.assertEqual(settings.settle_delay, 0.25)
        self.assertEqual(settings.highlight_window, 2.0)


class TestAdvance(unittest.TestCase):
    def test_feeding_order(self) -> None:
        self.assertEqual(advance(7, "feeding_type", FEEDING_FIELD_ORDER), "duration")
        self.assertEqual(advance(7, "duration", FEEDING_FIELD_ORDER), "amount")
        self.assertEqual(advance(7, "amount", FEEDING_FIELD_ORDER), "notes")
        self.assertEqual(advance(7, "notes", FEEDING_FIELD_ORDER), "feeding_type")

    def test_sleep_order(self) -> None:
        self.assertEqual(advance(1, "sleep_type", SLEEP_FIELD_ORDER), "start_time")
        self.assertEqual(advance(1, "end_time", SLEEP_FIELD_ORDER), "notes")

    def test_unknown_field_starts_at_first(self) -> None:
        self.assertEqual(advance(7, "timestamp", FEEDING_FIELD_ORDER), "feeding_type")


if __name__ == "__main__":
    unittest.main(verbosity=2)
