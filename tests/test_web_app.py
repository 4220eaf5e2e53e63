import unittest

from technews.config import Settings
from technews.ingestion.ingestors import BaseIngestor, FeedUnavailable
from technews.storage.sqlite_store import SQLiteArticleStore
from web_app import create_app


class StaticIngestor(BaseIngestor):
    name = "static"

    def __init__(self, articles=None, error=None):
        self.articles = articles or []
        self.error = error

    def fetch(self):
        if self.error:
            raise self.error
        return list(self.articles)


HEADLINES = [
    {"source": {"name": "Wired"}, "title": "Older", "url": "http://x/1", "publishedAt": "2024-05-01T08:00:00Z"},
    {"source": {"name": "Ars"}, "title": "Newer", "url": "http://x/2", "publishedAt": "2024-05-02T08:00:00Z"},
    {"source": {"name": "Ars"}, "title": "Newer again", "url": "http://x/2", "publishedAt": "2024-05-02T08:00:00Z"},
    {"source": {"name": "Removed"}, "title": None, "url": "https://removed.com"},
]


class TestWebApp(unittest.TestCase):
    def setUp(self):
        self.store = SQLiteArticleStore(":memory:")
        self.ingestor = StaticIngestor(HEADLINES)
        self.app = create_app(self.store, self.ingestor, Settings(cors_origins=["http://localhost:3000"]))
        self.client = self.app.test_client()

    def tearDown(self):
        self.store.close()

    def test_fetch_news_reports_saved_and_duplicates(self):
        r = self.client.post("/api/fetch-news")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.get_json(), {"success": True, "saved": 2, "duplicates": 1})

        r = self.client.post("/api/fetch-news")
        self.assertEqual(r.get_json(), {"success": True, "saved": 0, "duplicates": 3})

    def test_fetch_news_with_empty_feed(self):
        self.ingestor.articles = []
        r = self.client.post("/api/fetch-news")
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertEqual(data["saved"], 0)
        self.assertEqual(data["message"], "No articles found")

    def test_fetch_news_feed_failure_is_502(self):
        self.ingestor.error = FeedUnavailable("NewsAPI error: rateLimited")
        r = self.client.post("/api/fetch-news")
        self.assertEqual(r.status_code, 502)
        self.assertFalse(r.get_json()["success"])
        self.assertIn("rateLimited", r.get_json()["error"])

    def test_articles_listed_newest_first(self):
        self.client.post("/api/fetch-news")
        r = self.client.get("/api/articles")
        self.assertEqual(r.status_code, 200)
        articles = r.get_json()["articles"]
        self.assertEqual([a["title"] for a in articles], ["Newer", "Older"])
        self.assertEqual(
            set(articles[0]), {"id", "title", "description", "url", "source", "publishedAt", "isRead"}
        )
        self.assertEqual(articles[0]["source"], "Ars")
        self.assertFalse(articles[0]["isRead"])

    def test_mark_read(self):
        self.client.post("/api/fetch-news")
        article_id = self.client.get("/api/articles").get_json()["articles"][0]["id"]

        for _ in range(2):
            r = self.client.patch(f"/api/articles/{article_id}/read")
            self.assertEqual(r.status_code, 200)
            self.assertEqual(r.get_json(), {"success": True})

        articles = {a["id"]: a for a in self.client.get("/api/articles").get_json()["articles"]}
        self.assertTrue(articles[article_id]["isRead"])

    def test_mark_read_unknown_article_is_404(self):
        for article_id in ("999", "abc", "99999999999999999999"):
            r = self.client.patch(f"/api/articles/{article_id}/read")
            self.assertEqual(r.status_code, 404)
            self.assertEqual(r.get_json()["error"], "No such article")

    def test_storage_unavailable_is_503(self):
        self.store.close()
        r = self.client.get("/api/articles")
        self.assertEqual(r.status_code, 503)
        self.assertFalse(r.get_json()["success"])

        r = self.client.get("/api/health")
        self.assertEqual(r.status_code, 503)

    def test_health(self):
        r = self.client.get("/api/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.get_json(), {"status": "ok"})

    def test_unknown_endpoint_is_json_404(self):
        r = self.client.get("/api/nope")
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.get_json()["error"], "Endpoint not found")

    def test_wrong_method_is_405(self):
        r = self.client.get("/api/fetch-news")
        self.assertEqual(r.status_code, 405)

    def test_cors_allows_configured_origin(self):
        r = self.client.get("/api/articles", headers={"Origin": "http://localhost:3000"})
        self.assertEqual(r.headers.get("Access-Control-Allow-Origin"), "http://localhost:3000")

        r = self.client.get("/api/articles", headers={"Origin": "http://evil.example"})
        self.assertIsNone(r.headers.get("Access-Control-Allow-Origin"))


if __name__ == "__main__":
    unittest.main()
