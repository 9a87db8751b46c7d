"""
Pagination helper tests
"""
import pytest

from marketplace.utils.pagination import get_pagination_args, pagination_meta


class TestPaginationMeta:

    @pytest.mark.parametrize('total,limit,pages', [
        (0, 10, 0),
        (1, 10, 1),
        (10, 10, 1),
        (11, 10, 2),
        (101, 100, 2),
    ])
    def test_pages_is_ceiling(self, total, limit, pages):
        assert pagination_meta(1, limit, total) == {
            'page': 1, 'limit': limit, 'total': total, 'pages': pages,
        }


class TestPaginationArgs:

    @pytest.mark.parametrize('query,expected', [
        ('', (1, 10)),
        ('?page=3&limit=25', (3, 25)),
        ('?page=0&limit=0', (1, 1)),
        ('?page=-4&limit=5000', (1, 100)),
        ('?page=abc&limit=xyz', (1, 10)),
    ])
    def test_defaults_and_clamping(self, app, query, expected):
        with app.test_request_context(f'/api/services{query}'):
            assert get_pagination_args() == expected

    def test_endpoint_default_limit(self, app):
        with app.test_request_context('/api/messages/conversation'):
            assert get_pagination_args(default_limit=50) == (1, 50)
