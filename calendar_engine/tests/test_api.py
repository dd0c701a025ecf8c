"""API tests for the calendar endpoints."""

from datetime import date, time
from unittest import mock

from django.db import DatabaseError
from rest_framework import status
from rest_framework.test import APITestCase

from calendar_engine.colors import color_for
from calendar_engine.models import Experience, Rental, Session


class CalendarViewAPITests(APITestCase):
    """Test the day, week and month geometry endpoints."""

    def setUp(self):
        self.kayak = Experience.objects.create(title='Kayak', duration_minutes=60)
        self.hike = Experience.objects.create(title='Hike', duration_minutes=120)

        self.first = Session.objects.create(experience=self.kayak, session_date=date(2030, 1, 7), start_time=time(9, 0))
        self.second = Session.objects.create(experience=self.hike, session_date=date(2030, 1, 7), start_time=time(9, 30))
        self.later = Session.objects.create(experience=self.kayak, session_date=date(2030, 1, 7), start_time=time(14, 0))
        Session.objects.create(experience=self.kayak, session_date=date(2030, 1, 9), start_time=time(8, 0))

        Rental.objects.create(
            experience=self.hike,
            guest_name='Rivera',
            participants=4,
            start_date=date(2030, 1, 5),
            end_date=date(2030, 1, 8),
        )

    def test_day_view_places_overlapping_sessions_side_by_side(self):
        response = self.client.get('/api/calendar/day/', {'date': '2030-01-07'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        sessions = {item['id']: item for item in response.data['sessions']}
        self.assertEqual(len(sessions), 3)

        first = sessions[self.first.id]
        second = sessions[self.second.id]
        later = sessions[self.later.id]
        self.assertEqual((first['column'], first['cluster_size']), (0, 2))
        self.assertEqual((second['column'], second['cluster_size']), (1, 2))
        self.assertEqual(first['width'], 48.5)
        self.assertEqual(later['width'], 97.5)
        self.assertAlmostEqual(first['top'], 128)
        self.assertAlmostEqual(second['height'], 128)
        self.assertEqual(response.data['grid']['hour_labels'][0], '07:00')

    def test_day_view_colors_follow_experience(self):
        response = self.client.get('/api/calendar/day/', {'date': '2030-01-07', 'theme': 'dark'})

        item = next(s for s in response.data['sessions'] if s['id'] == self.first.id)
        self.assertEqual(item['color'], color_for(self.kayak.id).as_dict('dark'))
        self.assertEqual(item['style']['kind'], 'available')
        self.assertTrue(item['style']['draggable'])

    def test_day_view_filters_by_experience(self):
        response = self.client.get('/api/calendar/day/', {'date': '2030-01-07', 'experience': self.hike.id})
        self.assertEqual([item['id'] for item in response.data['sessions']], [self.second.id])

    def test_week_view(self):
        response = self.client.get('/api/calendar/week/', {'start': '2030-01-09'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['start'], '2030-01-07')
        self.assertEqual(response.data['end'], '2030-01-13')
        self.assertEqual(len(response.data['days']), 7)
        self.assertEqual(len(response.data['days'][0]['sessions']), 3)
        self.assertEqual(len(response.data['days'][2]['sessions']), 1)

    def test_month_view_splits_rental_across_weeks(self):
        response = self.client.get('/api/calendar/month/', {'month': '2030-01'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        weeks = response.data['weeks']
        self.assertEqual(len(weeks), 5)
        self.assertEqual(weeks[0]['start'], '2029-12-31')

        first_week = weeks[0]['segments'][0]
        self.assertEqual((first_week['start_column'], first_week['span']), (6, 2))
        self.assertTrue(first_week['is_start'])
        self.assertFalse(first_week['is_end'])

        second_week = weeks[1]['segments'][0]
        self.assertEqual((second_week['start_column'], second_week['span']), (1, 2))
        self.assertFalse(second_week['is_start'])
        self.assertTrue(second_week['is_end'])
        self.assertEqual(weeks[1]['row_count'], 1)
        self.assertEqual(weeks[2]['row_count'], 0)

        monday = weeks[1]['days'][0]
        self.assertEqual(monday['date'], '2030-01-07')
        self.assertEqual([pill['start_time'] for pill in monday['sessions']], ['09:00', '09:30', '14:00'])
        self.assertFalse(weeks[0]['days'][0]['in_month'])

    def test_month_view_rejects_bad_month(self):
        response = self.client.get('/api/calendar/month/', {'month': '2030-13'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_day_view_requires_date(self):
        response = self.client.get('/api/calendar/day/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class SessionAPITests(APITestCase):
    """Test session list, creation, reschedule and cancel endpoints."""

    def setUp(self):
        self.experience = Experience.objects.create(title='Surf lesson', duration_minutes=90)
        self.session = Session.objects.create(
            experience=self.experience,
            session_date=date(2030, 1, 7),
            start_time=time(9, 0),
            spots_total=4,
            spots_available=4,
        )

    def test_list_sessions_in_range(self):
        response = self.client.get('/api/sessions/', {'start': '2030-01-01', 'end': '2030-01-31'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['start_time'], '09:00')
        self.assertEqual(response.data[0]['duration_minutes'], 90)

    def test_list_rejects_reversed_range(self):
        response = self.client.get('/api/sessions/', {'start': '2030-01-31', 'end': '2030-01-01'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_session(self):
        data = {
            'experience': self.experience.id,
            'session_date': '2030-01-08',
            'start_time': '15:30',
            'spots_total': 6,
        }
        response = self.client.post('/api/sessions/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['spots_available'], 6)
        self.assertEqual(response.data['status'], 'available')

    def test_create_session_store_failure(self):
        data = {
            'experience': self.experience.id,
            'session_date': '2030-01-08',
            'start_time': '15:30',
        }
        with mock.patch(
            'calendar_engine.managers.SessionQuerySet.create',
            side_effect=DatabaseError('read-only database'),
        ):
            response = self.client.post('/api/sessions/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertIn('error', response.data)

    def test_reschedule_full_session(self):
        Session.objects.filter(pk=self.session.pk).update(spots_available=0)

        response = self.client.patch(
            f'/api/sessions/{self.session.id}/reschedule/',
            {'start_time': '10:15'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_recurring_sessions(self):
        data = {
            'experience': self.experience.id,
            'start_date': '2030-01-07',
            'end_date': '2030-01-21',
            'start_time': '11:00',
            'frequency': 'weekly',
            'spots_total': 2,
        }
        response = self.client.post('/api/sessions/recurring/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertFalse(response.data['nothing_to_create'])
        self.assertEqual(response.data['sessions_created'], 3)
        self.assertEqual(
            [item['session_date'] for item in response.data['sessions']],
            ['2030-01-07', '2030-01-14', '2030-01-21'],
        )

    def test_recurring_series_in_the_past(self):
        data = {
            'experience': self.experience.id,
            'start_date': '2020-01-01',
            'end_date': '2020-02-01',
            'start_time': '11:00',
            'frequency': 'daily',
        }
        response = self.client.post('/api/sessions/recurring/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['nothing_to_create'])
        self.assertEqual(response.data['sessions_created'], 0)
        self.assertEqual(Session.objects.count(), 1)

    def test_recurring_rejects_reversed_range(self):
        data = {
            'experience': self.experience.id,
            'start_date': '2030-02-01',
            'end_date': '2030-01-01',
            'start_time': '11:00',
        }
        response = self.client.post('/api/sessions/recurring/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_reschedule(self):
        response = self.client.patch(
            f'/api/sessions/{self.session.id}/reschedule/',
            {'start_time': '10:15'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['start_time'], '10:15')
        self.session.refresh_from_db()
        self.assertEqual(self.session.start_time, time(10, 15))

    def test_reschedule_booked_session(self):
        Session.objects.filter(pk=self.session.pk).update(status=Session.STATUS_BOOKED)

        response = self.client.patch(
            f'/api/sessions/{self.session.id}/reschedule/',
            {'start_time': '10:15'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.session.refresh_from_db()
        self.assertEqual(self.session.start_time, time(9, 0))

    def test_reschedule_missing_session(self):
        response = self.client.patch('/api/sessions/999999/reschedule/', {'start_time': '10:15'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_get_session_detail(self):
        response = self.client.get(f'/api/sessions/{self.session.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['experience_title'], 'Surf lesson')

    def test_cancel_session(self):
        response = self.client.delete(f'/api/sessions/{self.session.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.session.refresh_from_db()
        self.assertEqual(self.session.status, Session.STATUS_CANCELLED)

        response = self.client.delete(f'/api/sessions/{self.session.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class RentalAPITests(APITestCase):

    def test_list_rentals_touching_range(self):
        experience = Experience.objects.create(title='Cabin', pricing_type='per_day')
        Rental.objects.create(experience=experience, guest_name='Okafor', start_date=date(2030, 1, 5), end_date=date(2030, 1, 8))
        Rental.objects.create(experience=experience, guest_name='Lind', start_date=date(2030, 2, 5), end_date=date(2030, 2, 8))

        response = self.client.get('/api/rentals/', {'start': '2030-01-07', 'end': '2030-01-13'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['guest_name'] for item in response.data], ['Okafor'])
