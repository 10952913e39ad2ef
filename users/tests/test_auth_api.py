"""Integration tests for registration, login and vehicle endpoints."""
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from users.models import CustomUser, DriverVehicle


class AuthAPITests(APITestCase):

    def test_register_returns_tokens(self):
        response = self.client.post(reverse('register'), {
            'username': 'newdriver',
            'email': 'driver@example.com',
            'phone_number': '+14155552671',
            'user_type': 'driver',
            'password': 'ParkPass12345',
            'password_confirm': 'ParkPass12345',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn('access', response.data)
        self.assertEqual(response.data['user']['username'], 'newdriver')

    def test_password_mismatch(self):
        response = self.client.post(reverse('register'), {
            'username': 'newdriver',
            'phone_number': '+14155552671',
            'password': 'ParkPass12345',
            'password_confirm': 'Different123',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'validation')

    def test_login(self):
        CustomUser.objects.create_user(username='driver', password='ParkPass12345', phone_number='+12025550501')
        response = self.client.post(reverse('login'), {'username': 'driver', 'password': 'ParkPass12345'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn('refresh', response.data)

        response = self.client.post(reverse('login'), {'username': 'driver', 'password': 'wrong-password'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class DriverVehicleAPITests(APITestCase):

    def setUp(self):
        self.driver = CustomUser.objects.create_user(username='driver', password='ParkPass12345',
                                                     phone_number='+12025550601')
        self.other = CustomUser.objects.create_user(username='other', password='ParkPass12345',
                                                    phone_number='+12025550602')
        self.client.force_authenticate(self.driver)

    def test_register_vehicle(self):
        response = self.client.post(reverse('vehicle-list'), {'vehicle_number': 'ka01ab1234', 'vehicle_type': 'Car'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(DriverVehicle.objects.get().vehicle_number, 'KA01AB1234')

    def test_vehicle_number_is_unique(self):
        DriverVehicle.objects.create(driver=self.other, vehicle_number='KA01AB1234', vehicle_type='Car')
        response = self.client.post(reverse('vehicle-list'), {'vehicle_number': 'KA01AB1234', 'vehicle_type': 'Car'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_active_vehicles(self):
        DriverVehicle.objects.create(driver=self.driver, vehicle_number='KA01AB1234', vehicle_type='Car')
        DriverVehicle.objects.create(driver=self.driver, vehicle_number='KA01AB9999', vehicle_type='Bike',
                                     is_active=False)
        response = self.client.get(reverse('vehicle-active-vehicles'))
        self.assertEqual([row['vehicle_number'] for row in response.data], ['KA01AB1234'])
