"""Tests for the dashboard JSON API"""
import unittest

from app import create_app
from navigation.gps_navigator import GPSNavigator
from notifications.notification_manager import NotificationManager

ALCATRAZ = {"lat": 37.8267, "lon": -122.4233, "alt": 40.0, "name": "Alcatraz Island"}


class TestDashboardAPI(unittest.TestCase):

    def setUp(self):
        self.notifications = NotificationManager(sound_enabled=False)
        self.navigator = GPSNavigator(self.notifications)
        self.app = create_app(self.navigator, self.notifications)
        self.app.config['TESTING'] = True
        self.client = self.app.test_client()

    def test_health(self):
        response = self.client.get('/api/health')
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data['status'], 'healthy')
        self.assertEqual(data['navigation_status'], 'IDLE')
        self.assertEqual(data['gps_signal'], 'available')

    def test_status(self):
        data = self.client.get('/api/navigation/status').get_json()
        self.assertEqual(data['status'], 'IDLE')
        self.assertEqual(data['status_text'], 'IDLE')
        self.assertIsNone(data['destination'])
        self.assertEqual(data['distance_to_destination_km'], -1.0)
        self.assertTrue(data['signal']['available'])

    def test_navigation_flow(self):
        self.client.post('/api/gps/location', json={"lat": 37.7749, "lon": -122.4194})
        self.client.post('/api/gps/speed', json={"speed": 45})

        response = self.client.post('/api/navigation/destination', json=ALCATRAZ)
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertTrue(data['success'])
        self.assertEqual(data['destination_name'], "Alcatraz Island")
        self.assertEqual(data['destination'], {"lat": 37.8267, "lon": -122.4233, "alt": 40.0})

        data = self.client.post('/api/navigation/start').get_json()
        self.assertTrue(data['success'])
        self.assertEqual(data['status'], 'NAVIGATING')
        self.assertGreater(data['eta_minutes'], 0)

        data = self.client.post('/api/gps/location', json={"lat": 37.8268, "lon": -122.4233}).get_json()
        self.assertEqual(data['status'], 'ARRIVED')

        data = self.client.post('/api/navigation/stop').get_json()
        self.assertEqual(data['status'], 'IDLE')

    def test_start_without_destination_fails(self):
        data = self.client.post('/api/navigation/start').get_json()
        self.assertFalse(data['success'])
        self.assertEqual(data['status'], 'IDLE')

    def test_out_of_range_destination_rejected(self):
        response = self.client.post('/api/navigation/destination', json={"lat": 95.0, "lon": 0.0})
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertFalse(data['success'])
        self.assertIsNone(data['destination'])
        self.assertEqual(self.notifications.get_notifications()[-1].message,
                         "Invalid destination coordinates")

    def test_malformed_payloads(self):
        response = self.client.post('/api/navigation/destination', json={"lat": 10.0})
        self.assertEqual(response.status_code, 400)
        self.assertIn("lon", response.get_json()['error'])

        response = self.client.post('/api/gps/speed', json={"speed": "fast"})
        self.assertEqual(response.status_code, 400)

        response = self.client.post('/api/gps/heading', data="not json",
                                    content_type='application/json')
        self.assertEqual(response.status_code, 400)

        response = self.client.post('/api/gps/location', json={"lat": True, "lon": 1.0})
        self.assertEqual(response.status_code, 400)

    def test_heading_normalized(self):
        data = self.client.post('/api/gps/heading', json={"heading": 450}).get_json()
        self.assertEqual(data['current_heading'], 90.0)

    def test_signal_loss(self):
        data = self.client.post('/api/gps/signal', json={"satellites": 1, "accuracy": 3.0}).get_json()
        self.assertFalse(data['signal']['available'])
        self.assertTrue(self.client.get('/api/notifications').get_json()['has_critical'])

    def test_waypoints(self):
        response = self.client.post('/api/navigation/waypoints',
                                    json={"lat": 37.7849, "lon": -122.4094, "name": "Golden Gate Park"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['count'], 1)

        response = self.client.post('/api/navigation/waypoints', json={"lat": 37.0, "lon": 200.0})
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertFalse(data['success'])
        self.assertEqual(data['count'], 1)
        self.assertEqual(self.notifications.get_notifications()[-1].message,
                         "Invalid waypoint coordinates")

        response = self.client.post('/api/navigation/waypoints', json={"lat": 37.0})
        self.assertEqual(response.status_code, 400)

        data = self.client.get('/api/navigation/waypoints').get_json()
        self.assertEqual(data['count'], 1)
        self.assertEqual(data['waypoints'][0]['name'], "Golden Gate Park")

        self.client.delete('/api/navigation/waypoints')
        self.assertEqual(self.client.get('/api/navigation/waypoints').get_json()['count'], 0)

    def test_distance(self):
        response = self.client.post('/api/navigation/distance', json={
            "from": {"lat": 0.0, "lon": 0.0},
            "to": {"lat": 0.0, "lon": 1.0}
        })
        data = response.get_json()
        self.assertAlmostEqual(data['distance_km'], 111.19, delta=0.01)
        self.assertAlmostEqual(data['bearing_deg'], 90.0)

        response = self.client.post('/api/navigation/distance', json={
            "from": {"lat": 0.0, "lon": 0.0},
            "to": {"lat": 100.0, "lon": 1.0}
        })
        self.assertEqual(response.status_code, 400)

        response = self.client.post('/api/navigation/distance', json={"from": {"lat": 0.0, "lon": 0.0}})
        self.assertEqual(response.status_code, 400)

    def test_simulate(self):
        data = self.client.post('/api/gps/simulate').get_json()
        self.assertIsNotNone(data['current_location'])
        self.assertTrue(data['signal']['available'])

    def test_notifications(self):
        self.client.post('/api/navigation/start')
        data = self.client.get('/api/notifications').get_json()
        self.assertEqual(data['count'], 1)
        self.assertEqual(data['notifications'][0]['level'], 'WARNING')

        self.client.delete('/api/notifications')
        self.assertEqual(self.client.get('/api/notifications').get_json()['count'], 0)

    def test_metrics(self):
        self.client.post('/api/gps/speed', json={"speed": 88.0})
        data = self.client.get('/api/metrics').get_json()
        self.assertTrue(data['success'])
        self.assertEqual(data['metrics']['max_speed_kmh'], 88.0)

    def test_unknown_endpoint(self):
        self.assertEqual(self.client.get('/api/nope').status_code, 404)
        self.assertEqual(self.client.get('/api/navigation/start').status_code, 405)


if __name__ == '__main__':
    unittest.main()
