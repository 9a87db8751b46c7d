"""
Application-level behaviour: health, error envelopes, headers, CLI
"""
import json
import logging

from marketplace.models import ServiceCategory


class TestApp:

    def test_health(self, client):
        response = client.get('/health')

        assert response.status_code == 200
        assert json.loads(response.data)['status'] == 'healthy'

    def test_unknown_route(self, client):
        response = client.get('/api/nothing-here')

        assert response.status_code == 404
        assert json.loads(response.data) == {'success': False, 'message': 'Route not found'}

    def test_method_not_allowed(self, client):
        response = client.delete('/api/services/categories')

        assert response.status_code == 405
        assert json.loads(response.data)['success'] is False

    def test_request_id_generated(self, client):
        response = client.get('/health')

        assert response.headers.get('X-Request-ID')

    def test_request_id_echoed(self, client):
        response = client.get('/health', headers={'X-Request-ID': 'trace-abc'})

        assert response.headers['X-Request-ID'] == 'trace-abc'

    def test_security_headers(self, client):
        response = client.get('/health')

        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'

    def test_unhandled_error_is_hidden(self, app, client, caplog):
        @app.route('/boom')
        def boom():
            raise RuntimeError('database password is hunter2')

        with caplog.at_level(logging.ERROR):
            response = client.get('/boom')

        assert response.status_code == 500
        body = json.loads(response.data)
        assert body == {'success': False, 'message': 'Internal server error'}
        assert 'hunter2' not in response.get_data(as_text=True)
        assert any('Unhandled error' in r.getMessage() for r in caplog.records)


class TestCli:

    def test_seed_categories_is_idempotent(self, app):
        runner = app.test_cli_runner()

        first = runner.invoke(args=['seed-categories'])
        second = runner.invoke(args=['seed-categories'])

        assert first.exit_code == 0
        assert 'Seeded 5 categories' in first.output
        assert 'Seeded 0 categories' in second.output
        assert ServiceCategory.query.count() == 5

    def test_init_db(self, app):
        result = app.test_cli_runner().invoke(args=['init-db'])

        assert result.exit_code == 0
        assert 'Database tables created' in result.output
