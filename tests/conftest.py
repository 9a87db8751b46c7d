"""
Pytest configuration and fixtures for the marketplace API tests
"""
import itertools
from datetime import datetime, timedelta, timezone

import pytest

from marketplace import create_app
from marketplace.extensions import db
from marketplace.models import (
    Booking, ProviderProfile, Service, ServiceCategory, ServiceSubcategory, User,
)
from marketplace.utils.passwords import hash_password
from marketplace.utils.tokens import generate_token

PASSWORD = 'TestPass123'


def naive_utcnow():
    """Current UTC time without tzinfo, the way timestamps are stored"""
    return datetime.now(timezone.utc).replace(tzinfo=None)

_counter = itertools.count(1)


@pytest.fixture(scope='function')
def app():
    """Create application instance for testing, with a fresh in-memory database"""
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    return db.session


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
@pytest.fixture
def user_factory(db_session):
    """Factory for creating users; PROVIDER users get an empty provider profile"""
    def _create_user(**kwargs):
        n = next(_counter)
        password = kwargs.pop('password', PASSWORD)
        defaults = {
            'email': f'user{n}@example.com',
            'first_name': 'Test',
            'last_name': f'User{n}',
            'role': 'CUSTOMER',
            'is_active': True,
        }
        defaults.update(kwargs)
        user = User(password_hash=hash_password(password), **defaults)
        if user.role == 'PROVIDER':
            user.provider_profile = ProviderProfile(
                business_name=f'Business {n}', city='Riga', certifications=[],
            )
        db_session.add(user)
        db_session.commit()
        return user

    return _create_user


@pytest.fixture
def customer(user_factory):
    return user_factory(email='anna@example.com', first_name='Anna', last_name='Berzina')


@pytest.fixture
def other_customer(user_factory):
    return user_factory(email='peteris@example.com', first_name='Peteris', last_name='Ozols')


@pytest.fixture
def provider(user_factory):
    return user_factory(
        email='janis@example.com', first_name='Janis', last_name='Kalnins', role='PROVIDER',
    )


@pytest.fixture
def other_provider(user_factory):
    return user_factory(
        email='ilze@example.com', first_name='Ilze', last_name='Liepa', role='PROVIDER',
    )


@pytest.fixture
def headers_for(app):
    """Build JSON request headers carrying a bearer token for `user`"""
    def _headers(user):
        return {
            'Authorization': f'Bearer {generate_token(user)}',
            'Content-Type': 'application/json',
        }

    return _headers


@pytest.fixture
def auth_headers(headers_for, customer):
    return headers_for(customer)


@pytest.fixture
def provider_headers(headers_for, provider):
    return headers_for(provider)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@pytest.fixture
def category(db_session):
    category = ServiceCategory(
        name='Repairs', name_lv='Remonts', name_ru='Ремонт', name_en='Repairs', icon='wrench',
    )
    category.subcategories.append(ServiceSubcategory(
        name='Plumbing', name_lv='Santehnika', name_ru='Сантехника', name_en='Plumbing',
    ))
    db_session.add(category)
    db_session.commit()
    return category


@pytest.fixture
def subcategory(category):
    return category.subcategories[0]


@pytest.fixture
def service_factory(db_session, provider, category):
    def _create_service(**kwargs):
        defaults = {
            'provider_id': provider.id,
            'category_id': category.id,
            'title': 'Leaking tap repair',
            'description': 'Fast repair of leaking taps and pipes anywhere in Riga.',
            'price': 40.0,
            'price_type': 'FIXED',
            'service_area': ['Riga'],
        }
        defaults.update(kwargs)
        service = Service(**defaults)
        db_session.add(service)
        db_session.commit()
        return service

    return _create_service


@pytest.fixture
def service(service_factory):
    return service_factory()


# ---------------------------------------------------------------------------
# Bookings
# ---------------------------------------------------------------------------
@pytest.fixture
def booking_factory(db_session, customer, service):
    """Factory for creating bookings of `service` by `customer`"""
    def _create_booking(**kwargs):
        target = kwargs.pop('service', service)
        defaults = {
            'customer_id': customer.id,
            'provider_id': target.provider_id,
            'service_id': target.id,
            'scheduled_date': naive_utcnow() + timedelta(days=3),
            'scheduled_time': '10:00',
            'address': 'Brivibas iela 1',
            'city': 'Riga',
            'total_amount': target.price,
            'status': 'PENDING',
        }
        defaults.update(kwargs)
        booking = Booking(**defaults)
        db_session.add(booking)
        db_session.commit()
        return booking

    return _create_booking


@pytest.fixture
def booking(booking_factory):
    return booking_factory()


@pytest.fixture
def completed_booking(booking_factory):
    return booking_factory(status='COMPLETED', completed_at=naive_utcnow())
