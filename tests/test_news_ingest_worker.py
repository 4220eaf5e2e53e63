import os
import tempfile
import unittest
from unittest.mock import patch

import news_ingest_worker
from technews.config import Settings
from technews.ingestion.ingestors import BaseIngestor, FeedUnavailable
from technews.storage.sqlite_store import SQLiteArticleStore


class StaticIngestor(BaseIngestor):
    def __init__(self, articles=None, error=None):
        self.articles = articles or []
        self.error = error

    def fetch(self):
        if self.error:
            raise self.error
        return list(self.articles)


class TestRunOnce(unittest.TestCase):
    def setUp(self):
        self.store = SQLiteArticleStore(":memory:")

    def tearDown(self):
        self.store.close()

    def test_cycle_ingests_feed(self):
        ingestor = StaticIngestor([{"title": "A", "url": "http://x/1"}, {"title": "B", "url": "http://x/1"}])
        result = news_ingest_worker.run_once(self.store, ingestor)
        self.assertEqual(result.as_dict(), {"accepted": 1, "duplicates": 1})
        self.assertEqual(len(self.store.list_all()), 1)

    def test_feed_outage_skips_cycle(self):
        ingestor = StaticIngestor(error=FeedUnavailable("down"))
        self.assertIsNone(news_ingest_worker.run_once(self.store, ingestor))
        self.assertEqual(self.store.list_all(), [])


class StopLoop(Exception):
    pass


class TestRunScheduled(unittest.TestCase):
    @patch("news_ingest_worker.time.sleep", side_effect=StopLoop)
    @patch("news_ingest_worker.schedule")
    @patch("news_ingest_worker.run_once")
    def test_first_cycle_runs_immediately_then_on_interval(self, mock_run_once, mock_schedule, mock_sleep):
        store = object()
        ingestor = StaticIngestor()

        with self.assertRaises(StopLoop):
            news_ingest_worker.run_scheduled(store, ingestor, 15)

        mock_run_once.assert_called_once_with(store, ingestor)
        mock_schedule.every.assert_called_once_with(15)
        mock_schedule.every.return_value.minutes.do.assert_called_once_with(mock_run_once, store, ingestor)
        mock_schedule.run_pending.assert_called_once_with()
        mock_sleep.assert_called_once_with(5)

    @patch("news_ingest_worker.run_scheduled")
    def test_main_uses_interval_from_settings(self, mock_run_scheduled):
        settings = Settings(database_url=":memory:", ingest_mode="scheduled", ingest_interval_minutes=7)
        ingestor = StaticIngestor()
        with patch.object(news_ingest_worker.NewsAPIIngestor, "from_settings", return_value=ingestor):
            news_ingest_worker.main(settings)

        args = mock_run_scheduled.call_args[0]
        self.assertIs(args[1], ingestor)
        self.assertEqual(args[2], 7)


class TestMain(unittest.TestCase):
    def test_main_runs_once_and_closes_store(self):
        with tempfile.TemporaryDirectory() as tmp:
            db_path = os.path.join(tmp, "news.db")
            settings = Settings(database_url=db_path, news_api_key="k")
            ingestor = StaticIngestor([{"title": "A", "url": "http://x/1"}])

            with patch.object(news_ingest_worker.NewsAPIIngestor, "from_settings", return_value=ingestor):
                news_ingest_worker.main(settings)

            store = SQLiteArticleStore(db_path)
            try:
                self.assertEqual([a.url for a in store.list_all()], ["http://x/1"])
            finally:
                store.close()


if __name__ == "__main__":
    unittest.main()
