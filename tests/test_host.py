"""Tests for the host: checkout results and worker threads."""

from unittest.mock import MagicMock

import pygit2

from gitlane.git_backend.errors import CheckoutError
from gitlane.git_backend.repository import CommitSource
from gitlane.host.bridge import GitHost
from gitlane.host.workers import perform_checkout
from gitlane.sync.messages import CheckoutResult


class TestPerformCheckout:
    def test_success(self):
        source = MagicMock()
        assert perform_checkout(source, "abc") == CheckoutResult("abc", ok=True)
        source.checkout.assert_called_once_with("abc")

    def test_failure_reason_forwarded(self):
        source = MagicMock()
        source.checkout.side_effect = CheckoutError("abc", "1 conflict prevents checkout")
        result = perform_checkout(source, "abc")
        assert result == CheckoutResult("abc", ok=False, reason="1 conflict prevents checkout")


class TestGitHost:
    def make_host(self, source) -> tuple[GitHost, list[dict]]:
        host = GitHost(source)
        replies: list[dict] = []
        host.message_posted.connect(replies.append)
        return host, replies

    def test_malformed_message_ignored(self, qapp):
        source = MagicMock()
        host, replies = self.make_host(source)
        host.post_message({"command": "checkout"})
        assert replies == []
        source.checkout.assert_not_called()

    def test_busy_host_rejects_second_checkout(self, qapp):
        source = MagicMock()
        host, replies = self.make_host(source)
        host._checkout_thread = MagicMock()
        host._checkout_thread.isRunning.return_value = True

        host.post_message({"command": "checkout", "commitHash": "abc"})

        assert replies == [
            {
                "command": "checkoutResult",
                "commitHash": "abc",
                "ok": False,
                "reason": "Another checkout is in progress",
            }
        ]
        source.checkout.assert_not_called()

    def test_load_while_loading_is_ignored(self, qapp):
        """A running load keeps its thread; a second load() starts nothing."""
        host = GitHost(MagicMock())
        running = MagicMock()
        running.isRunning.return_value = True
        host._load_thread = running

        host.load()

        assert host.load_running
        assert host._load_thread is running
        assert host._load_worker is None

    def test_checkout_round_trip(self, history_repo, wait_for):
        host, replies = self.make_host(CommitSource(history_repo.path))
        target = history_repo.oids["C"]

        host.post_message({"command": "checkout", "commitHash": target})
        assert wait_for(lambda: len(replies) == 1)

        assert replies[0] == {"command": "checkoutResult", "commitHash": target, "ok": True}
        assert not host.checkout_running
        assert CommitSource(history_repo.path).current_head() == target
        host.shutdown()

    def test_failed_checkout_reply(self, history_repo, wait_for):
        host, replies = self.make_host(CommitSource(history_repo.path))

        host.post_message({"command": "checkout", "commitHash": "f" * 40})
        assert wait_for(lambda: len(replies) == 1)

        assert replies[0]["ok"] is False
        assert replies[0]["reason"]
        host.shutdown()

    def test_load_emits_snapshot(self, history_repo, wait_for):
        host = GitHost(CommitSource(history_repo.path))
        snapshots = []
        host.snapshot_ready.connect(snapshots.append)

        host.load()
        assert wait_for(lambda: len(snapshots) == 1)

        assert snapshots[0].head == history_repo.oids["D"]
        assert snapshots[0].num_rows == 4
        host.shutdown()

    def test_load_failure_reported(self, tmp_path, wait_for):
        pygit2.init_repository(str(tmp_path))
        host = GitHost(CommitSource(str(tmp_path)))
        errors = []
        host.load_failed.connect(errors.append)

        host.load()
        assert wait_for(lambda: len(errors) == 1)
        assert "no commits" in errors[0]
        host.shutdown()
