"""Tests for the shared app factory: root, health check and request IDs."""

import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient

from api.application import VERSION
from api.users.main import app as users_app
from api.wallet.main import app as wallet_app


class TestRoot(unittest.TestCase):

    def test_each_service_reports_its_name(self):
        for app, name in ((users_app, 'users-service'), (wallet_app, 'wallet-service')):
            with self.subTest(service=name):
                response = TestClient(app).get('/')

                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.json(), {
                    'service': name,
                    'version': VERSION,
                    'status': 'running',
                })

    def test_wallet_service_has_no_user_routes(self):
        response = TestClient(wallet_app).post('/users', json={})

        self.assertEqual(response.status_code, 404)


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(users_app)

    @patch('api.routes.health.ping_mongodb', new_callable=AsyncMock, return_value=True)
    @patch('api.routes.health.get_mongodb_client', return_value=MagicMock())
    def test_healthy(self, mock_client, mock_ping):
        response = self.client.get('/health')

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['status'], 'healthy')
        self.assertEqual(data['services']['mongodb']['status'], 'healthy')

    @patch('api.routes.health.ping_mongodb', new_callable=AsyncMock, return_value=False)
    @patch('api.routes.health.get_mongodb_client', return_value=MagicMock())
    def test_ping_failure_is_degraded(self, mock_client, mock_ping):
        response = self.client.get('/health')

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['status'], 'degraded')
        self.assertEqual(response.json()['services']['mongodb']['message'], 'Connection failed')

    @patch('api.routes.health.get_mongodb_client', return_value=None)
    def test_unconfigured_database(self, mock_client):
        response = self.client.get('/health')

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['services']['mongodb']['message'], 'Connection not configured')


class TestRequestId(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(wallet_app)

    def test_generates_request_id(self):
        response = self.client.get('/')

        self.assertTrue(response.headers['X-Request-ID'])

    def test_echoes_incoming_request_id(self):
        response = self.client.get('/', headers={'X-Request-ID': 'req-abc'})

        self.assertEqual(response.headers['X-Request-ID'], 'req-abc')

    def test_request_id_on_error_responses(self):
        response = self.client.get('/transactions', headers={'X-Request-ID': 'req-401'})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers['X-Request-ID'], 'req-401')


if __name__ == '__main__':
    unittest.main()
