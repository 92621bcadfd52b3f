import datetime
import threading
import unittest
from decimal import Decimal
from io import StringIO
from unittest import mock

from django.contrib.admin import site
from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.contrib.messages.storage.fallback import FallbackStorage
from django.core.management import call_command
from django.db import connection, connections
from django.db.models import ProtectedError
from django.test import RequestFactory, TestCase, TransactionTestCase

from courses.models import Course
from enrollment.models import Enrollment
from instructors.models import Instructor, OfficeAssignment
from students.models import Student
from .admin import DepartmentAdmin
from .exceptions import NotFoundError, ConcurrencyConflictError, DependencyExistsError
from .guards import ConcurrencyGuard, DeletionGuard
from .models import Department, DepartmentAuditLog
from .outcomes import Updated, Deleted, NotFound, Conflict, Blocked
from .services import DepartmentService
from .store import DepartmentStore
from .tasks import department_snapshot, record_department_change


def make_department(pk, name='Economics', budget='100000.00', version=1, administrator=None):
    return Department.objects.create(
        id=pk,
        name=name,
        budget=Decimal(budget),
        start_date=datetime.date(2007, 9, 1),
        administrator=administrator,
        version=version,
    )


class DepartmentUpdateAPITests(TestCase):
    """PUT/PATCH /api/departments/{id}/"""

    def setUp(self):
        self.instructor = Instructor.objects.create(
            last_name='Kapoor', first_mid_name='Candace', hire_date=datetime.date(2001, 1, 15)
        )
        self.department = make_department(5, version=3, administrator=self.instructor)
        self.url = '/api/departments/5/'

    def put(self, **overrides):
        body = {
            'Name': 'Economics',
            'Budget': 120000,
            'StartDate': '2007-09-01',
            'version': 3,
        }
        body.update(overrides)
        return self.client.put(self.url, body, content_type='application/json')

    def test_update_bumps_version_by_one(self):
        """Test that a successful update stores the fields and increments the version"""
        response = self.put()

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['version'], 4)
        self.assertEqual(data['Budget'], 120000)

        self.department.refresh_from_db()
        self.assertEqual(self.department.version, 4)
        self.assertEqual(self.department.budget, Decimal('120000'))

    def test_instructor_kept_when_omitted(self):
        """Test that leaving out InstructorID does not clear the administrator"""
        response = self.put()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['InstructorID'], self.instructor.id)

    def test_instructor_can_be_cleared(self):
        """Test that an explicit null InstructorID removes the administrator"""
        response = self.put(InstructorID=None)

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()['InstructorID'])
        self.department.refresh_from_db()
        self.assertIsNone(self.department.administrator_id)

    def test_stale_version_returns_conflict_with_current_data(self):
        """Test that a stale version gets 409 and currentData equals a fresh read"""
        self.assertEqual(self.put().status_code, 200)

        response = self.put(Budget=90000)

        self.assertEqual(response.status_code, 409)
        body = response.json()
        self.assertIn('modified by another user', body['message'])
        self.assertEqual(body['currentData']['version'], 4)
        self.assertEqual(body['currentData']['Budget'], 120000)

        fresh = self.client.get(self.url).json()
        self.assertEqual(body['currentData'], fresh)

        # The losing write left nothing behind
        self.department.refresh_from_db()
        self.assertEqual(self.department.budget, Decimal('120000'))
        self.assertEqual(self.department.version, 4)

    def test_two_editors_same_version(self):
        """Test that of two editors holding version 3 only the first wins, and the second can retry"""
        # Editor A
        first = self.put(Budget=120000)
        # Editor B, still holding version 3
        second = self.put(Budget=90000)

        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()['version'], 4)
        self.assertEqual(second.status_code, 409)
        self.assertEqual(second.json()['currentData']['Budget'], 120000)
        self.assertEqual(second.json()['currentData']['version'], 4)

        # B reloads and resubmits with the version it was shown
        retry = self.put(Budget=90000, version=4)
        self.assertEqual(retry.status_code, 200)
        self.assertEqual(retry.json()['version'], 5)
        self.assertEqual(retry.json()['Budget'], 90000)

    def test_future_version_is_a_conflict(self):
        """Test that a version ahead of the server is rejected like a stale one"""
        response = self.put(version=10)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()['currentData']['version'], 3)

    def test_update_missing_department(self):
        """Test that updating an unknown id returns 404"""
        response = self.client.put('/api/departments/999/', {
            'Name': 'Economics', 'Budget': 1, 'StartDate': '2007-09-01', 'version': 1
        }, content_type='application/json')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['message'], 'Department with ID 999 not found')

    def test_missing_version_is_rejected(self):
        """Test that PUT and PATCH without a version never reach the database"""
        response = self.client.put(self.url, {
            'Name': 'Economics', 'Budget': 1, 'StartDate': '2007-09-01'
        }, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('version', response.json())

        response = self.client.patch(self.url, {'Budget': 1}, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('version', response.json())

        self.department.refresh_from_db()
        self.assertEqual(self.department.version, 3)

    def test_invalid_fields_are_rejected(self):
        """Test field validation for name, budget and start date"""
        tomorrow = (datetime.date.today() + datetime.timedelta(days=1)).isoformat()
        cases = [
            {'Name': 'Math 101'},
            {'Name': ''},
            {'Name': 'x' * 51},
            {'Budget': -1},
            {'Budget': 1000000000},
            {'StartDate': '1899-12-31'},
            {'StartDate': tomorrow},
            {'version': 0},
            {'InstructorID': 9999},
        ]
        for overrides in cases:
            with self.subTest(overrides=overrides):
                response = self.put(**overrides)
                self.assertEqual(response.status_code, 400)

        self.department.refresh_from_db()
        self.assertEqual(self.department.version, 3)

    def test_patch_updates_subset(self):
        """Test that PATCH changes only the given fields and still bumps the version"""
        response = self.client.patch(self.url, {'Budget': 5000, 'version': 3}, content_type='application/json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['version'], 4)
        self.assertEqual(response.json()['Name'], 'Economics')
        self.assertEqual(response.json()['Budget'], 5000)

    def test_reads_do_not_change_version(self):
        """Test that GET on the list and on one department leaves the version alone"""
        self.client.get('/api/departments/')
        self.client.get(self.url)

        self.department.refresh_from_db()
        self.assertEqual(self.department.version, 3)


class DepartmentDeleteAPITests(TestCase):
    """DELETE /api/departments/{id}/"""

    def setUp(self):
        self.blocked = make_department(7, name='Engineering', budget='350000.00')
        self.course = Course.objects.create(id=2100, title='Statics', credits=3, department=self.blocked)
        self.free = make_department(8, name='Mathematics')

    def test_delete_blocked_by_course(self):
        """Test that a department with a course cannot be deleted"""
        response = self.client.delete('/api/departments/7/')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'message': 'cannot delete department with existing courses'})

        # Nothing was removed or cascaded
        self.assertTrue(Department.objects.filter(pk=7).exists())
        self.assertTrue(Course.objects.filter(pk=2100, department_id=7).exists())

    def test_delete_then_read_is_not_found(self):
        """Test that a deleted department is gone for reads, updates and deletes"""
        response = self.client.delete('/api/departments/8/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': 'Department deleted successfully'})

        self.assertEqual(self.client.get('/api/departments/8/').status_code, 404)
        self.assertEqual(self.client.delete('/api/departments/8/').status_code, 404)

        response = self.client.put('/api/departments/8/', {
            'Name': 'Mathematics', 'Budget': 1, 'StartDate': '2007-09-01', 'version': 1
        }, content_type='application/json')
        self.assertEqual(response.status_code, 404)

    def test_delete_missing_department(self):
        """Test that deleting an unknown id returns 404"""
        response = self.client.delete('/api/departments/999/')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['message'], 'Department with ID 999 not found')

    def test_delete_allowed_after_course_removed(self):
        """Test that removing the last course unblocks the delete"""
        self.course.delete()

        response = self.client.delete('/api/departments/7/')
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Department.objects.filter(pk=7).exists())


class DepartmentCreateAPITests(TestCase):

    def test_create_starts_at_version_one(self):
        """Test that a new department always starts at version 1"""
        response = self.client.post('/api/departments/', {
            'Name': 'History & Arts',
            'Budget': 25000,
            'StartDate': '2010-01-01',
            'version': 7,
        }, content_type='application/json')

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['version'], 1)
        self.assertEqual(Department.objects.get(pk=response.json()['DepartmentID']).version, 1)

    def test_list_includes_courses(self):
        """Test that the list payload carries administrator and courses"""
        department = make_department(3, name='English')
        Course.objects.create(id=2021, title='Composition', credits=3, department=department)

        response = self.client.get('/api/departments/')

        self.assertEqual(response.status_code, 200)
        entry = response.json()[0]
        self.assertEqual(entry['Name'], 'English')
        self.assertIsNone(entry['administrator'])
        self.assertEqual([c['CourseID'] for c in entry['courses']], [2021])


class GuardTests(TestCase):
    """Guards used directly against the store"""

    def setUp(self):
        self.store = DepartmentStore()
        self.department = make_department(5, version=3)

    def test_concurrency_guard_outcomes(self):
        guard = ConcurrencyGuard(self.store)

        outcome = guard.update(5, 3, {'budget': Decimal('1.00')})
        self.assertIsInstance(outcome, Updated)
        self.assertEqual(outcome.department.version, 4)

        outcome = guard.update(5, 3, {'budget': Decimal('2.00')})
        self.assertIsInstance(outcome, Conflict)
        self.assertEqual(outcome.expected_version, 3)
        self.assertEqual(outcome.current.version, 4)
        self.assertEqual(outcome.current.budget, Decimal('1.00'))

        self.assertEqual(guard.update(404, 1, {'budget': Decimal('1.00')}), NotFound(404))

    def test_deletion_guard_counts_dependents(self):
        Course.objects.create(id=1, title='One', credits=1, department=self.department)
        Course.objects.create(id=2, title='Two', credits=1, department=self.department)

        outcome = DeletionGuard(self.store).delete(5)

        self.assertEqual(outcome, Blocked(5, 2))
        self.assertTrue(Department.objects.filter(pk=5).exists())

    def test_deletion_guard_translates_protected_error(self):
        """Test that a course slipping past the count still blocks the delete"""
        Course.objects.create(id=1, title='One', credits=1, department=self.department)

        class BlindStore(DepartmentStore):
            def count_dependents(self, department_id):
                return 0

        outcome = DeletionGuard(BlindStore()).delete(5)

        self.assertIsInstance(outcome, Blocked)
        self.assertEqual(outcome.dependent_count, 1)
        self.assertTrue(Department.objects.filter(pk=5).exists())
        self.assertTrue(Course.objects.filter(pk=1).exists())

    def test_protect_foreign_key(self):
        Course.objects.create(id=1, title='One', credits=1, department=self.department)
        with self.assertRaises(ProtectedError):
            self.department.delete()

    def test_deletion_guard_deleted_and_not_found(self):
        outcome = DeletionGuard(self.store).delete(5)
        self.assertIsInstance(outcome, Deleted)
        self.assertEqual(outcome.department_id, 5)

        self.assertEqual(DeletionGuard(self.store).delete(5), NotFound(5))


class OutcomeTests(TestCase):

    def setUp(self):
        self.department = make_department(5, version=4)

    def test_success_outcomes_unwrap(self):
        self.assertIs(Updated(self.department).unwrap(), self.department)
        self.assertEqual(Deleted(5, self.department).unwrap(), {'message': 'Department deleted successfully'})

    def test_failure_outcomes_raise_mapped_errors(self):
        with self.assertRaises(NotFoundError) as ctx:
            NotFound(5).unwrap()
        self.assertEqual(ctx.exception.status_code, 404)

        with self.assertRaises(ConcurrencyConflictError) as ctx:
            Conflict(3, self.department).unwrap()
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertEqual(
            ctx.exception.message,
            'Department has been modified by another user. Expected version 3, but current version is 4.'
        )
        self.assertEqual(ctx.exception.payload()['currentData']['version'], 4)

        with self.assertRaises(DependencyExistsError) as ctx:
            Blocked(5, 1).unwrap()
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.payload(), {'message': 'cannot delete department with existing courses'})


class DepartmentAuditTests(TestCase):

    def setUp(self):
        self.department = make_department(5, version=3)

    def test_update_is_audited_after_commit(self):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.patch('/api/departments/5/', {
                'Budget': 1, 'version': 3
            }, content_type='application/json')

        self.assertEqual(response.status_code, 200)
        entry = DepartmentAuditLog.objects.get(department_id=5)
        self.assertEqual(entry.action, DepartmentAuditLog.Action.UPDATED)
        self.assertEqual(entry.version, 4)
        self.assertEqual(entry.snapshot['Budget'], '1.00')

    def test_delete_is_audited(self):
        with self.captureOnCommitCallbacks(execute=True):
            DepartmentService().delete_department(5)

        entry = DepartmentAuditLog.objects.get(department_id=5)
        self.assertEqual(entry.action, DepartmentAuditLog.Action.DELETED)
        self.assertEqual(entry.snapshot['Name'], 'Economics')

    def test_failed_mutations_are_not_audited(self):
        service = DepartmentService()
        with self.captureOnCommitCallbacks() as callbacks:
            service.update_department(5, 1, {'budget': Decimal('1.00')})
            service.update_department(999, 1, {'budget': Decimal('1.00')})
            service.delete_department(999)

        self.assertEqual(len(callbacks), 0)

    def test_record_task(self):
        snapshot = department_snapshot(self.department)
        entry_id = record_department_change(5, 'UPDATED', 3, snapshot)

        entry = DepartmentAuditLog.objects.get(pk=entry_id)
        self.assertEqual(entry.snapshot, {
            'Name': 'Economics',
            'Budget': '100000.00',
            'StartDate': '2007-09-01',
            'InstructorID': None,
            'version': 3,
        })


class DepartmentAdminTests(TestCase):
    """Admin edits and deletes take the same guarded path as the API"""

    def setUp(self):
        self.user = get_user_model().objects.create_superuser('admin', 'admin@example.com', 'testpass123')
        self.client.force_login(self.user)
        self.department = make_department(5, version=3)
        self.change_url = '/admin/departments/department/5/change/'

    def admin_post(self, budget, expected_version):
        return self.client.post(self.change_url, {
            'name': 'Economics',
            'budget': budget,
            'start_date': '2007-09-01',
            'administrator': '',
            'expected_version': expected_version,
            '_save': 'Save',
        })

    def test_change_form_carries_loaded_version(self):
        response = self.client.get(self.change_url)

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'name="expected_version" value="3"')

    def test_stale_admin_form_does_not_overwrite_newer_write(self):
        """Test that an admin form loaded at v3 cannot overwrite an API write made at v3"""
        self.client.get(self.change_url)

        response = self.client.put('/api/departments/5/', {
            'Name': 'Economics', 'Budget': 150000, 'StartDate': '2007-09-01', 'version': 3
        }, content_type='application/json')
        self.assertEqual(response.status_code, 200)

        response = self.admin_post(200000, 3)

        # Form is shown again with the conflict, nothing saved
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'modified by another user')
        self.assertNotContains(response, 'was changed successfully')
        self.department.refresh_from_db()
        self.assertEqual(self.department.budget, Decimal('150000'))
        self.assertEqual(self.department.version, 4)

    def test_admin_save_with_current_version(self):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.admin_post(200000, 3)

        self.assertEqual(response.status_code, 302)
        self.department.refresh_from_db()
        self.assertEqual(self.department.budget, Decimal('200000'))
        self.assertEqual(self.department.version, 4)
        self.assertTrue(
            DepartmentAuditLog.objects.filter(department_id=5, action=DepartmentAuditLog.Action.UPDATED).exists()
        )

    def test_admin_save_losing_race_is_not_reported_as_success(self):
        """Test that a write landing between validation and save still ends in an error"""
        real_update = DepartmentService.update_department

        def update_after_other_writer(service, department_id, expected_version, fields):
            Department.objects.filter(pk=department_id).update(version=expected_version + 1)
            return real_update(service, department_id, expected_version, fields)

        with mock.patch.object(DepartmentService, 'update_department', update_after_other_writer):
            response = self.admin_post(200000, 3)

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response['Location'], self.change_url)
        messages = [str(m) for m in get_messages(response.wsgi_request)]
        self.assertTrue(any('modified by another user' in m for m in messages))
        self.assertFalse(any('changed successfully' in m for m in messages))
        self.department.refresh_from_db()
        self.assertEqual(self.department.budget, Decimal('100000.00'))

    def test_admin_delete_is_guarded_and_audited(self):
        make_department(8, name='Mathematics')

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post('/admin/departments/department/8/delete/', {'post': 'yes'})

        self.assertEqual(response.status_code, 302)
        self.assertFalse(Department.objects.filter(pk=8).exists())
        self.assertTrue(
            DepartmentAuditLog.objects.filter(department_id=8, action=DepartmentAuditLog.Action.DELETED).exists()
        )

    def test_admin_bulk_delete_is_audited(self):
        make_department(8, name='Mathematics')
        make_department(9, name='English')

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post('/admin/departments/department/', {
                'action': 'delete_selected',
                '_selected_action': [8, 9],
                'post': 'yes',
            })

        self.assertEqual(response.status_code, 302)
        self.assertFalse(Department.objects.filter(pk__in=[8, 9]).exists())
        self.assertEqual(
            set(DepartmentAuditLog.objects.filter(action='DELETED').values_list('department_id', flat=True)),
            {8, 9}
        )

    def test_admin_delete_blocked_by_course(self):
        """Test that the admin delete hook refuses a department with courses"""
        Course.objects.create(id=2100, title='Statics', credits=3, department=self.department)
        request = RequestFactory().post('/admin/departments/department/5/delete/')
        request.user = self.user
        request.session = 'session'
        request._messages = FallbackStorage(request)
        model_admin = DepartmentAdmin(Department, site)

        model_admin.delete_model(request, self.department)
        model_admin.delete_queryset(request, Department.objects.filter(pk=5))

        self.assertTrue(Department.objects.filter(pk=5).exists())
        messages = [str(m) for m in get_messages(request)]
        self.assertEqual(len(messages), 2)
        self.assertIn('cannot delete department with existing courses', messages[0])
        response = model_admin.response_delete(request, str(self.department), 5)
        self.assertEqual(response['Location'], '/admin/departments/department/5/')


class SeedDataCommandTests(TestCase):

    def test_seed_and_reseed(self):
        call_command('seed_data', stdout=StringIO())

        self.assertEqual(Student.objects.count(), 8)
        self.assertEqual(Instructor.objects.count(), 5)
        self.assertEqual(OfficeAssignment.objects.count(), 3)
        self.assertEqual(Department.objects.count(), 4)
        self.assertEqual(Course.objects.count(), 7)
        self.assertEqual(Enrollment.objects.count(), 11)
        self.assertEqual(set(Department.objects.values_list('version', flat=True)), {1})
        self.assertEqual(Course.objects.get(pk=1050).instructors.count(), 2)

        # Without --flush existing data is left alone
        call_command('seed_data', stdout=StringIO())
        self.assertEqual(Department.objects.count(), 4)

        call_command('seed_data', '--flush', stdout=StringIO())
        self.assertEqual(Enrollment.objects.count(), 11)
        self.assertEqual(Department.objects.count(), 4)


@unittest.skipUnless(connection.vendor == 'postgresql', 'needs concurrent connections')
class ConcurrentUpdateTests(TransactionTestCase):
    """Real concurrent writers, each on its own connection"""

    def setUp(self):
        make_department(5, version=3)

    def run_concurrently(self, count, work):
        barrier = threading.Barrier(count)
        results = [None] * count

        def worker(index):
            try:
                barrier.wait()
                results[index] = work(index)
            finally:
                connections.close_all()

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return results

    def test_exactly_one_writer_wins(self):
        outcomes = self.run_concurrently(
            8,
            lambda i: DepartmentService().update_department(5, 3, {'budget': Decimal(i)})
        )

        winners = [o for o in outcomes if isinstance(o, Updated)]
        losers = [o for o in outcomes if isinstance(o, Conflict)]
        self.assertEqual(len(winners), 1)
        self.assertEqual(len(losers), 7)
        self.assertEqual(Department.objects.get(pk=5).version, 4)

        # Every loser was handed the winner's row, not its own write or the old one
        winner = winners[0].department
        for loser in losers:
            self.assertEqual(loser.expected_version, 3)
            self.assertEqual(loser.current.version, 4)
            self.assertEqual(loser.current.budget, winner.budget)
        self.assertEqual(Department.objects.get(pk=5).budget, winner.budget)

    def test_course_insert_during_delete(self):
        """Test that a delete racing a course insert ends with either both rows or neither"""
        department = Department.objects.get(pk=5)

        def work(index):
            if index == 0:
                return DepartmentService().delete_department(5)
            try:
                return Course.objects.create(id=2100, title='Statics', credits=3, department=department)
            except Exception as e:
                return e

        deleted, inserted = self.run_concurrently(2, work)

        if isinstance(deleted, Deleted):
            self.assertFalse(Course.objects.filter(pk=2100).exists())
        else:
            self.assertIsInstance(deleted, Blocked)
            self.assertTrue(Course.objects.filter(pk=2100, department_id=5).exists())
            self.assertTrue(Department.objects.filter(pk=5).exists())
