"""Unit tests for todo routes."""

import unittest
import sys
from pathlib import Path
from datetime import datetime, timedelta, timezone

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from fastapi.testclient import TestClient
from api.main import app
from api.dependencies import get_todo_repo
from adapter.fake.todo_repository import FakeTodoRepository
from domain.model.user import Role, User
from services.token_service import issue_token


def _make_user(user_id: str, email: str) -> User:
    now = datetime.now(timezone.utc)
    return User(id=user_id, name=email.split('@')[0], email=email, created_at=now, updated_at=now)


class TodoRoutesTestCase(unittest.TestCase):

    def setUp(self):
        """Set up test client with an in-memory todo store and two users."""
        self.client = TestClient(app)
        self.todo_repo = FakeTodoRepository()
        app.dependency_overrides[get_todo_repo] = lambda: self.todo_repo

        self.alice = _make_user('alice-id', 'alice@example.com')
        self.bob = _make_user('bob-id', 'bob@example.com')
        self.alice_headers = {"Authorization": f"Bearer {issue_token(self.alice)}"}
        self.bob_headers = {"Authorization": f"Bearer {issue_token(self.bob)}"}

    def tearDown(self):
        """Clean up dependency overrides."""
        app.dependency_overrides.clear()

    def _create(self, headers=None, **body):
        body.setdefault('title', 'Buy milk')
        response = self.client.post("/api/todos", json=body, headers=headers or self.alice_headers)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()['todo']

    def _list(self, headers=None):
        response = self.client.get("/api/todos", headers=headers or self.alice_headers)
        self.assertEqual(response.status_code, 200)
        return response.json()['todos']

    def _trash(self, headers=None):
        response = self.client.get("/api/todos/deleted/list", headers=headers or self.alice_headers)
        self.assertEqual(response.status_code, 200)
        return response.json()['todos']


class TestAuthentication(TodoRoutesTestCase):
    """Access middleware as seen through the todo endpoints."""

    def test_no_authorization_header(self):
        response = self.client.get("/api/todos")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "No token provided"})

    def test_garbage_token(self):
        response = self.client.get("/api/todos", headers={"Authorization": "Bearer not-a-jwt"})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"error": "Invalid token"})

    def test_expired_token(self):
        stale = issue_token(self.alice, now=datetime.now(timezone.utc) - timedelta(days=8))

        response = self.client.get("/api/todos", headers={"Authorization": f"Bearer {stale}"})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"error": "Invalid token"})

    def test_raw_token_without_bearer_prefix(self):
        response = self.client.get("/api/todos", headers={"Authorization": issue_token(self.alice)})
        self.assertEqual(response.status_code, 200)

    def test_every_todo_endpoint_requires_token(self):
        endpoints = [
            ("get", "/api/todos"),
            ("get", "/api/todos/deleted/list"),
            ("post", "/api/todos"),
            ("put", "/api/todos/abc"),
            ("delete", "/api/todos/abc"),
            ("put", "/api/todos/abc/restore"),
            ("delete", "/api/todos/abc/permanent"),
        ]
        for method, path in endpoints:
            with self.subTest(method=method, path=path):
                kwargs = {"json": {}} if method in ("post", "put") else {}
                response = getattr(self.client, method)(path, **kwargs)
                self.assertEqual(response.status_code, 401)


class TestCreateAndList(TodoRoutesTestCase):
    """Test POST /api/todos and GET /api/todos."""

    def test_create_returns_camel_case_todo_with_defaults(self):
        response = self.client.post("/api/todos", json={"title": "Buy milk"}, headers=self.alice_headers)

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['message'], "Todo created successfully")
        todo = data['todo']
        self.assertEqual(todo['title'], 'Buy milk')
        self.assertEqual(todo['description'], '')
        self.assertFalse(todo['isCompleted'])
        self.assertEqual(todo['priority'], 'Medium')
        self.assertIsNone(todo['dueDate'])
        self.assertEqual(todo['ownerId'], 'alice-id')
        self.assertFalse(todo['isDeleted'])
        self.assertIsNone(todo['deletedAt'])
        self.assertIn('createdAt', todo)
        self.assertIn('updatedAt', todo)

    def test_buy_milk_scenario(self):
        self._create(title='Buy milk')

        todos = self._list()

        self.assertEqual(len(todos), 1)
        self.assertEqual(todos[0]['title'], 'Buy milk')
        self.assertFalse(todos[0]['isCompleted'])
        self.assertEqual(todos[0]['priority'], 'Medium')

    def test_create_with_optional_fields(self):
        todo = self._create(
            title='Dentist',
            description='Bring insurance card',
            priority='High',
            dueDate='2026-11-03T09:30:00Z',
        )

        self.assertEqual(todo['description'], 'Bring insurance card')
        self.assertEqual(todo['priority'], 'High')
        self.assertTrue(todo['dueDate'].startswith('2026-11-03T09:30:00'))

    def test_blank_due_date_means_none(self):
        todo = self._create(title='No deadline', dueDate='')

        self.assertIsNone(todo['dueDate'])

        dated = self._create(title='Deadline', dueDate='2026-11-03T09:30:00Z')
        response = self.client.put(
            f"/api/todos/{dated['id']}", json={"dueDate": ""}, headers=self.alice_headers,
        )
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()['todo']['dueDate'])

    def test_create_without_title(self):
        for body in ({}, {"title": ""}, {"title": "   "}, {"description": "no title"}):
            with self.subTest(body=body):
                response = self.client.post("/api/todos", json=body, headers=self.alice_headers)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json(), {"error": "Title is required"})
        self.assertEqual(self._list(), [])

    def test_create_with_unknown_priority(self):
        response = self.client.post(
            "/api/todos", json={"title": "x", "priority": "Urgent"}, headers=self.alice_headers,
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("priority", response.json()['error'])

    def test_client_cannot_choose_owner(self):
        todo = self._create(title='sneaky', ownerId='bob-id')

        self.assertEqual(todo['ownerId'], 'alice-id')
        self.assertEqual(self._list(self.bob_headers), [])

    def test_list_is_scoped_to_caller(self):
        self._create(title='alice task')
        self._create(headers=self.bob_headers, title='bob task')

        self.assertEqual([t['title'] for t in self._list()], ['alice task'])
        self.assertEqual([t['title'] for t in self._list(self.bob_headers)], ['bob task'])

    def test_list_message(self):
        response = self.client.get("/api/todos", headers=self.alice_headers)
        self.assertEqual(response.json(), {"message": "Todos fetched successfully", "todos": []})


class TestUpdate(TodoRoutesTestCase):
    """Test PUT /api/todos/{id}."""

    def test_only_is_completed_changes(self):
        todo = self._create(title='Read book', description='chapter 3', priority='Low',
                            dueDate='2026-11-10T00:00:00Z')

        response = self.client.put(
            f"/api/todos/{todo['id']}", json={"isCompleted": True}, headers=self.alice_headers,
        )

        self.assertEqual(response.status_code, 200)
        updated = response.json()['todo']
        self.assertTrue(updated['isCompleted'])
        for field in ('title', 'description', 'priority', 'dueDate', 'createdAt'):
            self.assertEqual(updated[field], todo[field], field)

    def test_update_several_fields(self):
        todo = self._create()

        response = self.client.put(
            f"/api/todos/{todo['id']}",
            json={"title": "Buy oat milk", "priority": "High", "dueDate": None},
            headers=self.alice_headers,
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], "Todo updated successfully")
        updated = response.json()['todo']
        self.assertEqual(updated['title'], 'Buy oat milk')
        self.assertEqual(updated['priority'], 'High')
        self.assertIsNone(updated['dueDate'])

    def test_update_blank_title(self):
        todo = self._create()

        response = self.client.put(f"/api/todos/{todo['id']}", json={"title": ""}, headers=self.alice_headers)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self._list()[0]['title'], 'Buy milk')

    def test_update_someone_elses_todo_is_404(self):
        todo = self._create()

        response = self.client.put(
            f"/api/todos/{todo['id']}", json={"title": "mine now"}, headers=self.bob_headers,
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Todo not found"})
        self.assertEqual(self._list()[0]['title'], 'Buy milk')

    def test_update_unknown_todo(self):
        response = self.client.put("/api/todos/does-not-exist", json={"title": "x"}, headers=self.alice_headers)
        self.assertEqual(response.status_code, 404)


class TestTrashLifecycle(TodoRoutesTestCase):
    """Test soft delete, restore and permanent delete."""

    def test_soft_delete_moves_todo_to_trash(self):
        todo = self._create()

        response = self.client.delete(f"/api/todos/{todo['id']}", headers=self.alice_headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], "Todo deleted successfully")
        trashed = response.json()['todo']
        self.assertTrue(trashed['isDeleted'])
        self.assertIsNotNone(trashed['deletedAt'])
        self.assertEqual(self._list(), [])
        self.assertEqual([t['id'] for t in self._trash()], [todo['id']])

    def test_soft_delete_then_restore(self):
        todo = self._create()
        self.client.delete(f"/api/todos/{todo['id']}", headers=self.alice_headers)

        response = self.client.put(f"/api/todos/{todo['id']}/restore", headers=self.alice_headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], "Todo restored successfully")
        restored = response.json()['todo']
        self.assertFalse(restored['isDeleted'])
        self.assertIsNone(restored['deletedAt'])
        self.assertEqual([t['id'] for t in self._list()], [todo['id']])
        self.assertEqual(self._trash(), [])

    def test_restore_active_todo_is_404(self):
        todo = self._create()

        response = self.client.put(f"/api/todos/{todo['id']}/restore", headers=self.alice_headers)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Deleted todo not found"})

    def test_delete_twice_is_404(self):
        todo = self._create()
        self.client.delete(f"/api/todos/{todo['id']}", headers=self.alice_headers)

        response = self.client.delete(f"/api/todos/{todo['id']}", headers=self.alice_headers)

        self.assertEqual(response.status_code, 404)

    def test_trash_is_scoped_to_caller(self):
        todo = self._create()
        self.client.delete(f"/api/todos/{todo['id']}", headers=self.alice_headers)

        self.assertEqual(self._trash(self.bob_headers), [])
        response = self.client.put(f"/api/todos/{todo['id']}/restore", headers=self.bob_headers)
        self.assertEqual(response.status_code, 404)

    def test_permanent_delete(self):
        todo = self._create()
        self.client.delete(f"/api/todos/{todo['id']}", headers=self.alice_headers)

        response = self.client.delete(f"/api/todos/{todo['id']}/permanent", headers=self.alice_headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], "Todo permanently deleted successfully")
        self.assertEqual(response.json()['todo']['id'], todo['id'])
        self.assertEqual(self._list(), [])
        self.assertEqual(self._trash(), [])

        again = self.client.delete(f"/api/todos/{todo['id']}/permanent", headers=self.alice_headers)
        self.assertEqual(again.status_code, 404)
        self.assertEqual(again.json(), {"error": "Todo not found"})

    def test_permanent_delete_of_someone_elses_todo(self):
        todo = self._create()

        response = self.client.delete(f"/api/todos/{todo['id']}/permanent", headers=self.bob_headers)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(len(self._list()), 1)


class TestStoreFailure(TodoRoutesTestCase):
    """Store errors surface as 500 with a JSON error body."""

    def test_repository_error_is_500(self):
        from domain.model.errors import RepositoryError

        class BrokenRepo(FakeTodoRepository):
            def find_active(self, owner_id):
                raise RepositoryError("Failed to fetch todos")

        app.dependency_overrides[get_todo_repo] = lambda: BrokenRepo()

        response = self.client.get("/api/todos", headers=self.alice_headers)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Failed to fetch todos"})


if __name__ == '__main__':
    unittest.main()
