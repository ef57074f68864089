"""
HTTP tests for the seating service

Drive the full stack (controllers -> use cases -> in-memory store) through
FastAPI TestClient with a frozen clock.
"""

import pytest


@pytest.mark.api
class TestHealth:
    def test_health(self, client):
        response = client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'


@pytest.mark.api
class TestLibraryApi:
    def test_list_libraries(self, client):
        response = client.get('/api/library')

        assert response.status_code == 200
        body = response.json()
        assert [library['id'] for library in body['libraries']] == ['lib-a', 'lib-b']
        assert body['libraries'][1]['spot_status'] == 'limited'
        assert body['stats'] == {'library_count': 2, 'open_count': 2, 'available_seats': 4}
        assert body['degraded'] is False
        assert 'admin_pin' not in body['libraries'][0]


@pytest.mark.api
class TestStudentApi:
    def test_profile_missing_until_saved(self, client):
        assert client.get('/api/student').status_code == 404

    def test_save_and_read_profile(self, onboarded_client):
        response = onboarded_client.get('/api/student')

        assert response.status_code == 200
        assert response.json()['student_id'] == 'S-100'

    def test_incomplete_profile_is_rejected(self, client):
        response = client.put('/api/student', json={'name': 'Asha', 'student_id': 'S-1'})

        assert response.status_code == 400

    def test_reset_local_data(self, onboarded_client):
        onboarded_client.post('/api/booking', json={'library_id': 'lib-b'})

        response = onboarded_client.delete('/api/student/data')

        assert response.status_code == 204
        assert onboarded_client.get('/api/student').status_code == 404
        assert onboarded_client.get('/api/library').json()['stats']['available_seats'] == 4


@pytest.mark.api
class TestBookingApi:
    def test_booking_requires_profile(self, client):
        response = client.post('/api/booking', json={'library_id': 'lib-a'})

        assert response.status_code == 404

    def test_create_booking(self, onboarded_client):
        response = onboarded_client.post('/api/booking', json={'library_id': 'lib-a'})

        assert response.status_code == 201
        body = response.json()
        assert body['status'] == 'pending'
        assert body['student_id'] == 'S-100'
        assert onboarded_client.get('/api/library').json()['stats']['available_seats'] == 3

    def test_duplicate_booking_conflicts(self, onboarded_client):
        onboarded_client.post('/api/booking', json={'library_id': 'lib-a'})

        response = onboarded_client.post('/api/booking', json={'library_id': 'lib-a'})

        assert response.status_code == 409
        assert response.json()['detail'] == 'You already have an active booking here'

    def test_unknown_library(self, onboarded_client):
        response = onboarded_client.post('/api/booking', json={'library_id': 'nowhere'})

        assert response.status_code == 404
        assert response.json()['detail'] == 'Library not found'

    def test_rebook_after_reservation_lapsed(self, onboarded_client, frozen_clock):
        first = onboarded_client.post('/api/booking', json={'library_id': 'lib-b'}).json()
        frozen_clock.advance(minutes=10)

        response = onboarded_client.post('/api/booking', json={'library_id': 'lib-b'})

        assert response.status_code == 201
        assert response.json()['id'] != first['id']

    def test_unreadable_ledger_is_503(self, onboarded_client, seat_store):
        onboarded_client.get('/api/library')
        seat_store.documents['test_seat:bookings:lib-a'] = b'garbage'

        response = onboarded_client.post('/api/booking', json={'library_id': 'lib-a'})

        assert response.status_code == 503
        assert response.headers['retry-after'] == '5'

    def test_pending_countdown(self, onboarded_client, frozen_clock):
        created = onboarded_client.post('/api/booking', json={'library_id': 'lib-a'}).json()
        frozen_clock.advance(seconds=45)

        body = onboarded_client.get('/api/booking/pending').json()

        assert body['booking']['id'] == created['id']
        assert body['seconds_left'] == 315
        assert body['countdown'] == '5:15'

    def test_no_pending_booking(self, onboarded_client):
        body = onboarded_client.get('/api/booking/pending').json()

        assert body == {'booking': None, 'seconds_left': 0, 'countdown': '0:00'}

    def test_scan_in_and_out(self, onboarded_client, frozen_clock):
        onboarded_client.post('/api/booking', json={'library_id': 'lib-a'})

        checked_in = onboarded_client.post('/api/booking/scan', json={'code': 'lib-a'}).json()
        frozen_clock.advance(minutes=30)
        checked_out = onboarded_client.post('/api/booking/scan', json={'code': 'lib-a'}).json()

        assert checked_in['outcome'] == 'checked_in'
        assert checked_in['session_remaining'] == '4h 0m'
        assert checked_out['outcome'] == 'checked_out'
        assert checked_out['booking']['status'] == 'completed'

    def test_scan_unknown_code(self, onboarded_client):
        response = onboarded_client.post('/api/booking/scan', json={'code': 'poster-42'})

        assert response.status_code == 200
        assert response.json()['outcome'] == 'no_active_booking'

    def test_history_newest_first(self, onboarded_client, frozen_clock):
        first = onboarded_client.post('/api/booking', json={'library_id': 'lib-a'}).json()
        frozen_clock.advance(minutes=1)
        second = onboarded_client.post('/api/booking', json={'library_id': 'lib-b'}).json()

        body = onboarded_client.get('/api/booking', params={'student_id': 'S-100'}).json()

        assert [b['id'] for b in body['bookings']] == [second['id'], first['id']]


@pytest.mark.api
class TestAdminApi:
    def test_login_with_library_pin(self, onboarded_client):
        onboarded_client.post('/api/booking', json={'library_id': 'lib-b'})

        response = onboarded_client.post('/api/admin/login', json={'pin': '2222'})

        assert response.status_code == 200
        body = response.json()
        assert body['is_master'] is False
        assert body['library_id'] == 'lib-b'
        assert [(row['library']['id'], row['pending_count']) for row in body['libraries']] == [
            ('lib-b', 1)
        ]

    def test_login_with_master_pin(self, client):
        body = client.post('/api/admin/login', json={'pin': '1234'}).json()

        assert body['is_master'] is True
        assert len(body['libraries']) == 2

    def test_login_with_bad_pin(self, client):
        assert client.post('/api/admin/login', json={'pin': '0000'}).status_code == 401

    def test_release_checked_in_seat(self, onboarded_client):
        onboarded_client.post('/api/booking', json={'library_id': 'lib-a'})
        onboarded_client.post('/api/booking/scan', json={'code': 'lib-a'})

        response = onboarded_client.post(
            '/api/admin/library/lib-a/release',
            json={'count': 2},
            headers={'X-Admin-Pin': '1111'},
        )

        assert response.status_code == 200
        assert response.json() == {'library_id': 'lib-a', 'released_count': 1, 'available_spots': 3}

    def test_release_outside_scope(self, client):
        response = client.post(
            '/api/admin/library/lib-a/release',
            json={'count': 1},
            headers={'X-Admin-Pin': '2222'},
        )

        assert response.status_code == 403

    def test_release_without_pin(self, client):
        response = client.post('/api/admin/library/lib-a/release', json={'count': 1})

        assert response.status_code == 401

    def test_reconcile(self, onboarded_client, frozen_clock):
        onboarded_client.post('/api/booking', json={'library_id': 'lib-b'})
        frozen_clock.advance(minutes=7)

        response = onboarded_client.post('/api/admin/reconcile', headers={'X-Admin-Pin': '1234'})

        assert response.status_code == 200
        assert response.json() == {
            'released_seats': 1,
            'released_by_library': {'lib-b': 1},
            'degraded': False,
        }
