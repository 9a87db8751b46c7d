"""
Review tests
Tests review eligibility and the service rating aggregate
"""
import json

import pytest

from marketplace.models import Notification, Review, Service

from conftest import naive_utcnow


@pytest.fixture
def completed_for(booking_factory):
    """A completed booking of `service` (default fixture service) by `customer_id`"""
    def _completed(**kwargs):
        return booking_factory(status='COMPLETED', completed_at=naive_utcnow(), **kwargs)

    return _completed


def _rating_of(db_session, service_id):
    db_session.expire_all()
    service = db_session.get(Service, service_id)
    return service.average_rating, service.total_reviews


class TestCreateReview:
    """Test who may review what"""

    def test_create_review(self, client, auth_headers, completed_booking, provider):
        response = client.post('/api/reviews', headers=auth_headers, json={
            'bookingId': completed_booking.id,
            'rating': 4,
            'title': 'Quick and tidy',
            'comment': 'Fixed the tap in twenty minutes.',
        })

        assert response.status_code == 201
        data = json.loads(response.data)['data']
        assert data['rating'] == 4
        assert data['providerId'] == provider.id
        assert data['isApproved'] is True
        assert Notification.query.filter_by(user_id=provider.id, type='REVIEW_RECEIVED').count() == 1

    def test_booking_must_be_completed(self, client, auth_headers, booking):
        response = client.post('/api/reviews', headers=auth_headers, json={
            'bookingId': booking.id, 'rating': 5,
        })

        assert response.status_code == 400
        assert json.loads(response.data)['message'] == 'You can only review completed bookings'

    def test_booking_must_be_own(self, client, headers_for, other_customer, completed_booking):
        response = client.post('/api/reviews', headers=headers_for(other_customer), json={
            'bookingId': completed_booking.id, 'rating': 5,
        })

        assert response.status_code == 403

    def test_missing_booking(self, client, auth_headers):
        response = client.post('/api/reviews', headers=auth_headers, json={
            'bookingId': 'missing', 'rating': 5,
        })

        assert response.status_code == 404

    def test_one_review_per_booking(self, client, auth_headers, completed_booking):
        body = {'bookingId': completed_booking.id, 'rating': 5}
        client.post('/api/reviews', headers=auth_headers, json=body)

        response = client.post('/api/reviews', headers=auth_headers, json=body)

        assert response.status_code == 400
        assert Review.query.count() == 1

    def test_concurrent_duplicate_hits_unique_constraint(self, client, auth_headers, completed_booking, db_session, monkeypatch):
        body = {'bookingId': completed_booking.id, 'rating': 5}
        client.post('/api/reviews', headers=auth_headers, json=body)
        # Both submissions pass the duplicate check before either commits
        monkeypatch.setattr('marketplace.routes.reviews._already_reviewed', lambda *args: False)

        response = client.post('/api/reviews', headers=auth_headers, json=dict(body, rating=1))

        assert response.status_code == 400
        assert json.loads(response.data)['message'] == 'You have already reviewed this booking'
        assert Review.query.count() == 1
        assert db_session.get(Service, completed_booking.service_id).average_rating == 5

    @pytest.mark.parametrize('rating', [0, 6])
    def test_rating_range(self, client, auth_headers, completed_booking, rating):
        response = client.post('/api/reviews', headers=auth_headers, json={
            'bookingId': completed_booking.id, 'rating': rating,
        })

        assert response.status_code == 400
        assert json.loads(response.data)['errors'][0]['field'] == 'rating'

    def test_comment_length(self, client, auth_headers, completed_booking):
        response = client.post('/api/reviews', headers=auth_headers, json={
            'bookingId': completed_booking.id, 'rating': 3, 'comment': 'meh',
        })

        assert response.status_code == 400


class TestServiceRating:
    """averageRating / totalReviews always match the approved reviews"""

    def _review(self, client, headers, booking, rating):
        response = client.post('/api/reviews', headers=headers, json={
            'bookingId': booking.id, 'rating': rating,
        })
        assert response.status_code == 201
        return json.loads(response.data)['data']['id']

    def test_no_reviews(self, db_session, service):
        assert _rating_of(db_session, service.id) == (0, 0)

    def test_single_review(self, client, auth_headers, db_session, service, completed_for):
        self._review(client, auth_headers, completed_for(), 4)

        assert _rating_of(db_session, service.id) == (4.0, 1)

    def test_many_reviews_mean(self, client, auth_headers, db_session, service, completed_for):
        for rating in (5, 4, 2):
            self._review(client, auth_headers, completed_for(), rating)

        average, count = _rating_of(db_session, service.id)
        assert count == 3
        assert average == pytest.approx(11 / 3)

    def test_update_recomputes(self, client, auth_headers, db_session, service, completed_for):
        first = self._review(client, auth_headers, completed_for(), 5)
        self._review(client, auth_headers, completed_for(), 3)

        response = client.put(f'/api/reviews/{first}', headers=auth_headers, json={'rating': 1})

        assert response.status_code == 200
        assert _rating_of(db_session, service.id) == (2.0, 2)

    def test_delete_recomputes_to_zero(self, client, auth_headers, db_session, service, completed_for):
        review_id = self._review(client, auth_headers, completed_for(), 5)

        response = client.delete(f'/api/reviews/{review_id}', headers=auth_headers)

        assert response.status_code == 200
        assert _rating_of(db_session, service.id) == (0, 0)

    def test_unapproved_reviews_ignored(self, client, auth_headers, db_session, service, completed_for):
        hidden = self._review(client, auth_headers, completed_for(), 1)
        db_session.get(Review, hidden).is_approved = False
        db_session.commit()

        self._review(client, auth_headers, completed_for(), 5)

        assert _rating_of(db_session, service.id) == (5.0, 1)
        listed = json.loads(client.get(f'/api/reviews/service/{service.id}').data)['data']
        assert [r['rating'] for r in listed] == [5]

    def test_rating_visible_on_listing(self, client, auth_headers, service, completed_for):
        self._review(client, auth_headers, completed_for(), 3)

        item = json.loads(client.get(f'/api/services/{service.id}').data)['data']
        assert item['averageRating'] == 3
        assert item['totalReviews'] == 1
        assert len(item['reviews']) == 1


class TestUpdateDeleteReview:
    """Only the author may change a review"""

    @pytest.fixture
    def review(self, db_session, customer, completed_booking):
        review = Review(
            customer_id=customer.id,
            provider_id=completed_booking.provider_id,
            service_id=completed_booking.service_id,
            booking_id=completed_booking.id,
            rating=4,
        )
        db_session.add(review)
        db_session.commit()
        return review

    def test_update_by_other_user(self, client, headers_for, other_customer, review):
        response = client.put(f'/api/reviews/{review.id}', headers=headers_for(other_customer), json={'rating': 1})

        assert response.status_code == 403

    def test_update_missing(self, client, auth_headers):
        assert client.put('/api/reviews/missing', headers=auth_headers, json={'rating': 1}).status_code == 404

    def test_delete_by_other_user(self, client, headers_for, other_customer, review):
        response = client.delete(f'/api/reviews/{review.id}', headers=headers_for(other_customer))

        assert response.status_code == 403

    def test_provider_responds(self, client, provider_headers, review):
        response = client.post(f'/api/reviews/{review.id}/respond', headers=provider_headers, json={
            'response': 'Thank you for the kind words!',
        })

        assert response.status_code == 200
        data = json.loads(response.data)['data']
        assert data['response'] == 'Thank you for the kind words!'
        assert data['responseDate'] is not None

    def test_other_provider_cannot_respond(self, client, headers_for, other_provider, review):
        response = client.post(f'/api/reviews/{review.id}/respond', headers=headers_for(other_provider), json={
            'response': 'Not my review',
        })

        assert response.status_code == 403

    def test_customer_cannot_respond(self, client, auth_headers, review):
        response = client.post(f'/api/reviews/{review.id}/respond', headers=auth_headers, json={
            'response': 'Replying to myself',
        })

        assert response.status_code == 403


class TestListReviews:

    def test_provider_reviews_paginated(self, client, auth_headers, provider, completed_for):
        for rating in (5, 4, 3):
            client.post('/api/reviews', headers=auth_headers, json={
                'bookingId': completed_for().id, 'rating': rating,
            })

        data = json.loads(client.get(f'/api/reviews/provider/{provider.id}?limit=2').data)

        assert len(data['data']) == 2
        assert data['pagination'] == {'page': 1, 'limit': 2, 'total': 3, 'pages': 2}
        assert data['data'][0]['customer']['firstName'] == 'Anna'
