"""
Tests for navigation state and completion signals
"""

import threading
import unittest

from quadnav.navigation.nav_state import (
    NavigationState, CompletionSignal, NavigationOutcome,
    AlreadyNavigatingError, NavigationRangeError, NavigationError
)


class TestNavigationState(unittest.TestCase):
    """Test axis ownership"""

    def setUp(self):
        self.state = NavigationState('height')

    def test_initially_idle(self):
        self.assertFalse(self.state.active)

    def test_claim_marks_active(self):
        token = self.state.claim()

        self.assertTrue(self.state.active)
        self.assertTrue(self.state.owns(token))

    def test_second_claim_rejected(self):
        self.state.claim()

        with self.assertRaises(AlreadyNavigatingError):
            self.state.claim()

    def test_cancel_idle_is_noop(self):
        self.state.cancel()
        self.state.cancel()

        self.assertFalse(self.state.active)

    def test_cancel_clears_ownership(self):
        token = self.state.claim()
        self.state.cancel()

        self.assertFalse(self.state.active)
        self.assertFalse(self.state.owns(token))
        self.assertFalse(self.state.superseded(token))

    def test_reclaim_after_cancel_supersedes_old_task(self):
        old = self.state.claim()
        self.state.cancel()
        new = self.state.claim()

        self.assertTrue(self.state.superseded(old))
        self.assertFalse(self.state.owns(old))
        self.assertTrue(self.state.owns(new))

    def test_stale_release_keeps_new_owner(self):
        old = self.state.claim()
        self.state.cancel()
        new = self.state.claim()

        self.state.release(old)

        self.assertTrue(self.state.active)
        self.assertTrue(self.state.owns(new))

    def test_release_by_owner_clears(self):
        token = self.state.claim()
        self.state.release(token)

        self.assertFalse(self.state.active)

    def test_concurrent_claims_single_winner(self):
        """Only one of many racing claims succeeds"""
        winners = []
        barrier = threading.Barrier(8)

        def claim():
            barrier.wait()
            try:
                winners.append(self.state.claim())
            except AlreadyNavigatingError:
                pass

        threads = [threading.Thread(target=claim) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(winners), 1)


class TestCompletionSignal(unittest.TestCase):
    """Test one-shot completion"""

    def test_pending_wait_times_out(self):
        signal = CompletionSignal('yaw')

        self.assertIsNone(signal.wait(timeout=0.01))
        self.assertFalse(signal.done)

    def test_send_delivers_outcome(self):
        signal = CompletionSignal('yaw')

        self.assertTrue(signal.send(NavigationOutcome.REACHED))
        self.assertTrue(signal.done)
        self.assertEqual(signal.wait(timeout=0), NavigationOutcome.REACHED)

    def test_second_send_ignored(self):
        signal = CompletionSignal('yaw')
        signal.send(NavigationOutcome.CANCELLED)

        self.assertFalse(signal.send(NavigationOutcome.REACHED))
        self.assertEqual(signal.outcome, NavigationOutcome.CANCELLED)

    def test_send_without_reader_does_not_block(self):
        signal = CompletionSignal('height')
        t = threading.Thread(target=signal.send, args=(NavigationOutcome.REACHED,))
        t.start()
        t.join(timeout=1.0)

        self.assertFalse(t.is_alive())

    def test_repr(self):
        signal = CompletionSignal('height')
        self.assertIn('PENDING', repr(signal))


class TestErrors(unittest.TestCase):
    """Test error hierarchy"""

    def test_range_error_is_value_error(self):
        self.assertTrue(issubclass(NavigationRangeError, ValueError))
        self.assertTrue(issubclass(NavigationRangeError, NavigationError))

    def test_conflict_error_is_navigation_error(self):
        self.assertTrue(issubclass(AlreadyNavigatingError, NavigationError))


if __name__ == '__main__':
    unittest.main()
