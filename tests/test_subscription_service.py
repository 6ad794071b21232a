import unittest

import support  # noqa: F401

from app.core.subscription_store import clear_subscriptions, consume_job_target, get_subscription  # noqa: E402
from app.services.subscription_service import (  # noqa: E402
    LocalSubscriptionService,
    QuotaExceeded,
    get_quota,
    update_tier,
    use_job_target_comparison,
)


class SubscriptionServiceTests(unittest.TestCase):
    def setUp(self):
        clear_subscriptions()

    def test_new_user_gets_free_quota(self):
        quota = get_quota("new-user")
        self.assertEqual(quota.tier, "free")
        self.assertEqual(quota.remaining, 3)

    def test_free_quota_is_consumed_then_exhausted(self):
        remaining = [use_job_target_comparison("free-user").remaining for _ in range(3)]
        self.assertEqual(remaining, [2, 1, 0])
        with self.assertRaises(QuotaExceeded) as ctx:
            use_job_target_comparison("free-user")
        self.assertEqual(ctx.exception.status_code, 402)
        self.assertEqual(get_quota("free-user").remaining, 0)

    def test_premium_tier_is_unlimited(self):
        update_tier("paying-user", "premium")
        for _ in range(5):
            quota = use_job_target_comparison("paying-user")
        self.assertEqual(quota.tier, "premium")
        self.assertIsNone(quota.remaining)

    def test_admin_email_as_user_id_gets_no_special_tier(self):
        quota = LocalSubscriptionService().get_quota("admin@example.com")
        self.assertEqual(quota.tier, "free")
        self.assertEqual(quota.remaining, 3)

    def test_admin_tier_is_granted_through_the_store(self):
        quota = update_tier("ops-lead", "admin")
        self.assertEqual(quota.tier, "admin")
        self.assertIsNone(quota.remaining)
        self.assertIsNone(use_job_target_comparison("ops-lead").remaining)

    def test_usage_resets_in_a_new_period(self):
        consume_job_target("monthly-user", limit=3, period="2026-01")
        consume_job_target("monthly-user", limit=3, period="2026-01")
        self.assertEqual(get_subscription("monthly-user", period="2026-01")["job_target_used"], 2)
        self.assertEqual(get_subscription("monthly-user", period="2026-02")["job_target_used"], 0)
        self.assertEqual(consume_job_target("monthly-user", limit=3, period="2026-02"), 2)


if __name__ == "__main__":
    unittest.main()
