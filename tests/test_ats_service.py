import unittest
from unittest.mock import patch

from support import data_analyst_resume, good_resume

from app.core.subscription_store import clear_subscriptions  # noqa: E402
from app.schemas.ats import ScoreRequest, ScoringConfig, StoredResumeScoreRequest  # noqa: E402
from app.schemas.resume import ResumeDocument  # noqa: E402
from app.scoring import InputTooLarge, InvalidConfig  # noqa: E402
from app.services.ats_service import ResumeNotFound, run_ats_score, run_stored_resume_score  # noqa: E402
from app.services.subscription_service import QuotaExceeded, get_quota  # noqa: E402


class InMemoryResumeStore:
    def __init__(self):
        self.documents = {}

    def load_resume(self, user_id):
        return self.documents.get(user_id)

    def save_resume(self, user_id, document):
        self.documents[user_id] = document

    def delete_resume(self, user_id):
        return self.documents.pop(user_id, None) is not None


class AtsServiceTests(unittest.TestCase):
    def setUp(self):
        clear_subscriptions()

    def test_anonymous_job_target_is_charged_to_client_key(self):
        payload = ScoreRequest(document=data_analyst_resume(), job_target="python sql")
        run_ats_score(payload, client_key="203.0.113.7")
        self.assertEqual(get_quota("anon:203.0.113.7").remaining, 2)

    def test_unauthenticated_user_id_is_charged_to_client_key(self):
        payload = ScoreRequest(document=data_analyst_resume(), job_target="python", user_id="admin@example.com")
        run_ats_score(payload, client_key="198.51.100.4")
        self.assertEqual(get_quota("anon:198.51.100.4").remaining, 2)
        self.assertEqual(get_quota("admin@example.com").remaining, 3)

    def test_authenticated_user_id_is_charged_to_user(self):
        payload = ScoreRequest(document=data_analyst_resume(), job_target="python", user_id="analyst-7")
        run_ats_score(payload, client_key="198.51.100.4", authenticated=True)
        self.assertEqual(get_quota("analyst-7").remaining, 2)
        self.assertEqual(get_quota("anon:198.51.100.4").remaining, 3)

    def test_scoring_without_job_target_is_free(self):
        payload = ScoreRequest(document=good_resume(), user_id="no-charge")
        for _ in range(5):
            run_ats_score(payload, client_key="testclient", authenticated=True)
        self.assertEqual(get_quota("no-charge").remaining, 3)

    def test_failed_scoring_does_not_consume_quota(self):
        payload = ScoreRequest(
            document=good_resume(),
            job_target="python",
            user_id="bad-config",
            config={"categoryWeights": {"formatting": 100}},
        )
        with self.assertRaises(InvalidConfig):
            run_ats_score(payload, client_key="testclient", authenticated=True)
        self.assertEqual(get_quota("bad-config").remaining, 3)

    def test_exhausted_quota_blocks_before_scoring(self):
        payload = ScoreRequest(document=data_analyst_resume(), job_target="python", user_id="spent")
        for _ in range(3):
            run_ats_score(payload, client_key="testclient", authenticated=True)
        with patch("app.services.ats_service.score") as score_mock:
            with self.assertRaises(QuotaExceeded):
                run_ats_score(payload, client_key="testclient", authenticated=True)
        score_mock.assert_not_called()

    def test_requested_input_limit_cannot_exceed_server_ceiling(self):
        document = ResumeDocument(summary="word " * 12000)
        payload = ScoreRequest(document=document, config=ScoringConfig(max_input_chars=10**9))
        with self.assertRaises(InputTooLarge):
            run_ats_score(payload, client_key="testclient")

        lowered = ScoreRequest(document=good_resume(), config=ScoringConfig(max_input_chars=50))
        with self.assertRaises(InputTooLarge):
            run_ats_score(lowered, client_key="testclient")

    def test_stored_resume_is_scored_through_store_contract(self):
        store = InMemoryResumeStore()
        store.save_resume("jane", good_resume())
        result = run_stored_resume_score("jane", StoredResumeScoreRequest(), store=store)
        self.assertGreaterEqual(result.overall_score, 75)

        with self.assertRaises(ResumeNotFound):
            run_stored_resume_score("missing", StoredResumeScoreRequest(), store=store)


if __name__ == "__main__":
    unittest.main()
