#!/usr/bin/env python3
"""
Flask web application for the tech news reader.
Exposes news fetching, the article list and read-state updates as JSON endpoints.
"""

import logging
from typing import Optional

from flask import Flask, current_app, jsonify

from cors_config import configure_cors
from technews.config import Settings, load_settings
from technews.ingestion.ingestors import BaseIngestor, FeedUnavailable, NewsAPIIngestor
from technews.ingestion.pipeline import ingest
from technews.storage.article_store import ArticleStore
from technews.storage.errors import StorageUnavailable
from technews.storage.factory import open_store
from technews.storage.models import MarkReadResult
from technews.tracking.read_state import ReadStateTracker

logger = logging.getLogger(__name__)


def create_app(
    store: ArticleStore,
    ingestor: BaseIngestor,
    settings: Optional[Settings] = None,
) -> Flask:
    """Build the app around an already-open store.

    The store's lifecycle belongs to the caller: it is opened once at startup
    and closed on shutdown, never per request.
    """
    settings = settings or Settings()
    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions['article_store'] = store
    app.extensions['news_ingestor'] = ingestor
    app.extensions['read_state'] = ReadStateTracker(store)
    configure_cors(app, settings.cors_origins)

    @app.route('/api/fetch-news', methods=['POST'])
    def fetch_news():
        """Fetch headlines from the feed and store the new ones"""
        logger.info("Starting news fetch...")
        articles = current_app.extensions['news_ingestor'].fetch()
        if not articles:
            return jsonify({'success': True, 'saved': 0, 'duplicates': 0, 'message': 'No articles found'})

        result = ingest(current_app.extensions['article_store'], articles)
        logger.info(f"Saved {result.accepted} new articles ({result.duplicates} were duplicates)")
        return jsonify({'success': True, 'saved': result.accepted, 'duplicates': result.duplicates})

    @app.route('/api/articles', methods=['GET'])
    def get_articles():
        """All stored articles, newest first"""
        articles = current_app.extensions['article_store'].list_all()
        return jsonify({'success': True, 'articles': [a.as_dict() for a in articles]})

    @app.route('/api/articles/<article_id>/read', methods=['PATCH'])
    def mark_article_read(article_id):
        """Mark one article as read"""
        result = current_app.extensions['read_state'].mark_read(article_id)
        if result is MarkReadResult.NOT_FOUND:
            return jsonify({'success': False, 'error': 'No such article'}), 404
        return jsonify({'success': True})

    @app.route('/api/health', methods=['GET'])
    def health():
        current_app.extensions['article_store'].ping()
        return jsonify({'status': 'ok'})

    @app.errorhandler(FeedUnavailable)
    def feed_unavailable(error):
        logger.error(f"Error fetching news: {error}")
        return jsonify({'success': False, 'error': str(error)}), 502

    @app.errorhandler(StorageUnavailable)
    def storage_unavailable(error):
        logger.error(f"Article store unavailable: {error}")
        return jsonify({'success': False, 'error': str(error)}), 503

    @app.errorhandler(404)
    def not_found(error):
        """Custom 404 handler"""
        return jsonify({'success': False, 'error': 'Endpoint not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'success': False, 'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        """Custom 500 handler"""
        logger.error(f"Internal server error: {error}")
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    return app


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    store = open_store(settings.database_url)
    try:
        app = create_app(store, NewsAPIIngestor.from_settings(settings), settings)
        logger.info(f"Starting tech news web interface on port {settings.port}")
        logger.info(f"Debug mode: {settings.debug}")
        # The reloader would fork a second process holding its own handle.
        app.run(
            host='0.0.0.0',
            port=settings.port,
            debug=settings.debug,
            use_reloader=False,
            threaded=True,
        )
    finally:
        store.close()


if __name__ == '__main__':
    main()
