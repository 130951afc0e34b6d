"""
Todos API: /todos Endpoint Tests
=================================

What:  HTTP-level tests for every todo route, through the full middleware
       and exception-handler stack.
How:   HTTPX AsyncClient over ASGITransport; each test gets a fresh app and
       store (see conftest.py).

What we test:
    ✅ Listing with limit/userId, including junk query values
    ✅ 404 bodies (with available_ids on GET, without elsewhere)
    ✅ Create: 201 envelope, id sequence, 400 with echoed body
    ✅ PUT vs PATCH response shapes over the same partial-update semantics
    ✅ Delete, toggle and complete
    ✅ JSON and form-encoded bodies; malformed bodies
    ✅ Trailing-slash paths served without a redirect
"""

import pytest


class TestListTodos:
    """GET /todos"""

    @pytest.mark.asyncio
    async def test_list_all(self, test_client):
        response = await test_client.get("/todos")

        assert response.status_code == 200
        body = response.json()
        assert [t["id"] for t in body] == [1, 2, 3, 4, 5]
        assert body[0] == {"userId": 1, "id": 1, "title": "delectus aut autem", "completed": False}

    @pytest.mark.asyncio
    async def test_user_filter_with_limit(self, test_client):
        response = await test_client.get("/todos", params={"userId": 1, "limit": 2})

        assert response.status_code == 200
        todos = response.json()
        assert [t["id"] for t in todos] == [1, 2]
        assert all(t["userId"] == 1 for t in todos)

    @pytest.mark.asyncio
    async def test_junk_query_values_are_ignored(self, test_client):
        response = await test_client.get("/todos", params={"userId": "abc", "limit": "lots"})

        assert response.status_code == 200
        assert len(response.json()) == 5


class TestGetTodo:
    """GET /todos/{id}"""

    @pytest.mark.asyncio
    async def test_get_existing(self, test_client):
        response = await test_client.get("/todos/2")

        assert response.status_code == 200
        assert response.json()["title"] == "quis ut nam facilis"
        assert response.json()["completed"] is True

    @pytest.mark.asyncio
    async def test_missing_lists_current_ids(self, test_client):
        await test_client.delete("/todos/4")

        response = await test_client.get("/todos/4")

        assert response.status_code == 404
        assert response.json() == {
            "error": "Todo not found",
            "id": 4,
            "available_ids": [1, 2, 3, 5],
        }

    @pytest.mark.asyncio
    async def test_unparsable_id_is_not_found(self, test_client):
        response = await test_client.get("/todos/abc")

        assert response.status_code == 404
        assert response.json()["id"] is None
        assert response.json()["available_ids"] == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_non_ascii_digit_id_is_not_found(self, test_client):
        response = await test_client.get("/todos/٣")

        assert response.status_code == 404
        assert response.json()["id"] is None


class TestCreateTodo:
    """POST /todos"""

    @pytest.mark.asyncio
    async def test_create_returns_201_envelope(self, test_client):
        response = await test_client.post("/todos", json={"title": "  buy milk ", "userId": "2"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Todo created successfully"
        assert body["todo"] == {"userId": 2, "id": 6, "title": "buy milk", "completed": False}
        assert body["timestamp"].endswith("Z")

    @pytest.mark.asyncio
    async def test_ids_never_reused(self, test_client):
        first = await test_client.post("/todos", json={"title": "x"})
        assert first.json()["todo"]["id"] == 6

        deleted = await test_client.delete("/todos/6")
        assert deleted.status_code == 200

        second = await test_client.post("/todos", json={"title": "y"})
        assert second.json()["todo"]["id"] == 7

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"title": ""}, {"title": "   "}, {"completed": True}])
    async def test_missing_title_is_400_and_store_unchanged(self, test_client, store, payload):
        response = await test_client.post("/todos", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Title is required", "received_body": payload}
        assert store.count == 5

    @pytest.mark.asyncio
    async def test_bad_user_id_is_400(self, test_client, store):
        response = await test_client.post("/todos", json={"title": "x", "userId": "someone"})

        assert response.status_code == 400
        assert response.json()["error"] == "userId must be an integer"
        assert store.count == 5

    @pytest.mark.asyncio
    async def test_form_encoded_body(self, test_client):
        response = await test_client.post(
            "/todos", data={"title": "from a form", "completed": "false", "userId": "3"}
        )

        assert response.status_code == 201
        todo = response.json()["todo"]
        assert todo["title"] == "from a form"
        # Any non-empty string is truthy, "false" included
        assert todo["completed"] is True
        assert todo["userId"] == 3

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client, store):
        response = await test_client.post(
            "/todos",
            content=b'{"title": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Request body is not valid JSON"
        assert response.json()["received_body"] == '{"title": '
        assert store.count == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw",
        [b'{"completed": NaN}', b'{"title": "x", "userId": Infinity}', b'{"title": "x", "completed": -Infinity}'],
    )
    async def test_non_standard_json_constants_are_400(self, test_client, store, raw):
        response = await test_client.post(
            "/todos", content=raw, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "Request body is not valid JSON",
            "received_body": raw.decode(),
        }
        assert store.count == 5

    @pytest.mark.asyncio
    async def test_json_array_body_is_400(self, test_client):
        response = await test_client.post("/todos", json=["title"])

        assert response.status_code == 400
        assert response.json()["received_body"] == ["title"]

    @pytest.mark.asyncio
    async def test_non_json_content_type_is_empty_body(self, test_client):
        response = await test_client.post(
            "/todos", content=b"title=x", headers={"Content-Type": "text/plain"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Title is required", "received_body": {}}


class TestUpdateTodo:
    """PUT and PATCH /todos/{id}"""

    @pytest.mark.asyncio
    async def test_put_applies_only_supplied_fields(self, test_client):
        response = await test_client.put("/todos/1", json={"title": " renamed "})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Todo updated successfully"
        assert body["updated_todo"] == {"userId": 1, "id": 1, "title": "renamed", "completed": False}
        assert body["updated_fields"] == {"title": True, "completed": False, "userId": False}
        assert "timestamp" in body

    @pytest.mark.asyncio
    async def test_patch_lists_applied_fields(self, test_client):
        response = await test_client.patch("/todos/3", json={"completed": 1, "userId": 4})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Todo partially updated"
        assert body["updated_fields"] == ["completed", "userId"]
        assert body["todo"]["completed"] is True
        assert body["todo"]["userId"] == 4

    @pytest.mark.asyncio
    async def test_update_persists(self, test_client):
        await test_client.patch("/todos/5", json={"title": "changed"})

        response = await test_client.get("/todos/5")
        assert response.json()["title"] == "changed"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["put", "patch"])
    async def test_missing_id_is_404_without_directory(self, test_client, method):
        response = await getattr(test_client, method)("/todos/77", json={"title": "x"})

        assert response.status_code == 404
        assert response.json() == {"error": "Todo not found", "id": 77}

    @pytest.mark.asyncio
    async def test_non_string_title_is_400(self, test_client):
        response = await test_client.put("/todos/1", json={"title": 5})

        assert response.status_code == 400
        assert response.json() == {"error": "Title must be a string", "received_body": {"title": 5}}


class TestDeleteTodo:
    """DELETE /todos/{id}"""

    @pytest.mark.asyncio
    async def test_delete_existing(self, test_client):
        response = await test_client.delete("/todos/2")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Todo deleted successfully"
        assert body["deleted_todo"]["id"] == 2
        assert body["remaining_todos"] == 4

        followup = await test_client.get("/todos/2")
        assert followup.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_leaves_store(self, test_client, store):
        response = await test_client.delete("/todos/99")

        assert response.status_code == 404
        assert response.json() == {"error": "Todo not found", "id": 99}
        assert store.count == 5


class TestCompletion:
    """POST /todos/{id}/toggle and /todos/{id}/complete"""

    @pytest.mark.asyncio
    async def test_toggle_round_trip(self, test_client):
        first = await test_client.post("/todos/1/toggle")
        assert first.status_code == 200
        assert first.json()["message"] == "Todo completed"
        assert first.json()["todo"]["completed"] is True

        second = await test_client.post("/todos/1/toggle")
        assert second.json()["message"] == "Todo uncompleted"
        assert second.json()["todo"]["completed"] is False

    @pytest.mark.asyncio
    async def test_toggle_missing(self, test_client):
        response = await test_client.post("/todos/0/toggle")

        assert response.status_code == 404
        assert response.json() == {"error": "Todo not found", "id": 0}

    @pytest.mark.asyncio
    async def test_complete_defaults_to_true(self, test_client):
        response = await test_client.post("/todos/3/complete")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Todo marked as completed"
        assert body["action"] == "completed"
        assert body["todo"]["completed"] is True

    @pytest.mark.asyncio
    async def test_complete_false(self, test_client):
        response = await test_client.post("/todos/2/complete", json={"completed": False})

        body = response.json()
        assert body["message"] == "Todo marked as incomplete"
        assert body["action"] == "uncompleted"
        assert body["todo"]["completed"] is False

    @pytest.mark.asyncio
    async def test_complete_missing(self, test_client):
        response = await test_client.post("/todos/123/complete", json={"completed": True})

        assert response.status_code == 404
        assert response.json()["id"] == 123


class TestTrailingSlash:
    """Routes answer directly with a trailing slash instead of redirecting."""

    @pytest.mark.asyncio
    async def test_list_with_slash(self, test_client):
        response = await test_client.get("/todos/")

        assert response.status_code == 200
        assert len(response.json()) == 5

    @pytest.mark.asyncio
    async def test_create_with_slash(self, test_client, store):
        response = await test_client.post("/todos/", json={"title": "slashed"})

        assert response.status_code == 201
        assert response.json()["todo"]["id"] == 6
        assert store.count == 6

    @pytest.mark.asyncio
    async def test_get_one_with_slash(self, test_client):
        response = await test_client.get("/todos/1/")

        assert response.status_code == 200
        assert response.json()["id"] == 1

    @pytest.mark.asyncio
    async def test_toggle_with_slash(self, test_client):
        response = await test_client.post("/todos/1/toggle/")

        assert response.status_code == 200
        assert response.json()["todo"]["completed"] is True
