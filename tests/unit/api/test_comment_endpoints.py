"""HTTP tests for the comment endpoints."""

from __future__ import annotations

import pytest


pytestmark = pytest.mark.unit

API = "/api/v1"


class TestCreateComment:
    """Tests for POST /comments/recipe/{id}."""

    @pytest.mark.asyncio
    async def test_top_level_comment(self, client, signed_in, seed_recipe) -> None:
        """Should store a trimmed top-level comment."""
        user, headers = await signed_in()
        recipe_id = await seed_recipe(user.id)

        response = await client.post(
            f"{API}/comments/recipe/{recipe_id}",
            json={"content": "  Lovely crumb  "},
            headers=headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Comment added successfully"
        assert body["comment"]["content"] == "Lovely crumb"
        assert body["comment"]["parentId"] is None
        assert body["comment"]["userId"] == user.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("parent", ["", "null", None])
    async def test_empty_parent_means_top_level(
        self, client, signed_in, seed_recipe, parent
    ) -> None:
        """Should treat blank parent markers as no parent."""
        user, headers = await signed_in()
        recipe_id = await seed_recipe(user.id)

        response = await client.post(
            f"{API}/comments/recipe/{recipe_id}",
            json={"content": "Nice", "parentId": parent},
            headers=headers,
        )

        assert response.status_code == 201
        assert response.json()["comment"]["parentId"] is None

    @pytest.mark.asyncio
    async def test_reply_with_string_parent(
        self, client, signed_in, seed_recipe
    ) -> None:
        """Should accept a numeric string parent id."""
        user, headers = await signed_in()
        recipe_id = await seed_recipe(user.id)
        parent = await client.post(
            f"{API}/comments/recipe/{recipe_id}",
            json={"content": "First"},
            headers=headers,
        )
        parent_id = parent.json()["comment"]["id"]

        response = await client.post(
            f"{API}/comments/recipe/{recipe_id}",
            json={"content": "Reply", "parentId": str(parent_id)},
            headers=headers,
        )

        assert response.status_code == 201
        assert response.json()["comment"]["parentId"] == parent_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("parent", ["²", "2147483648", 2**31])
    async def test_unusable_parent_rejected(
        self, client, signed_in, seed_recipe, store, parent
    ) -> None:
        """Should answer 400 for parent ids that are not INTEGER-range digits."""
        user, headers = await signed_in()
        recipe_id = await seed_recipe(user.id)

        response = await client.post(
            f"{API}/comments/recipe/{recipe_id}",
            json={"content": "hi", "parentId": parent},
            headers=headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"
        assert store.comments == {}

    @pytest.mark.asyncio
    async def test_reply_to_reply_rejected(
        self, client, signed_in, seed_recipe
    ) -> None:
        """Should keep threads one level deep."""
        user, headers = await signed_in()
        recipe_id = await seed_recipe(user.id)
        url = f"{API}/comments/recipe/{recipe_id}"
        top = (await client.post(url, json={"content": "a"}, headers=headers)).json()
        reply = (
            await client.post(
                url,
                json={"content": "b", "parentId": top["comment"]["id"]},
                headers=headers,
            )
        ).json()

        response = await client.post(
            url,
            json={"content": "c", "parentId": reply["comment"]["id"]},
            headers=headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_too_long(self, client, signed_in, seed_recipe) -> None:
        """Should cap comments at 300 characters."""
        user, headers = await signed_in()
        recipe_id = await seed_recipe(user.id)

        response = await client.post(
            f"{API}/comments/recipe/{recipe_id}",
            json={"content": "x" * 301},
            headers=headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_recipe(self, client, signed_in) -> None:
        """Should return 404 for a missing recipe."""
        _, headers = await signed_in()

        response = await client.post(
            f"{API}/comments/recipe/999", json={"content": "Hi"}, headers=headers
        )

        assert response.status_code == 404


class TestListComments:
    """Tests for GET /comments/recipe/{id}."""

    @pytest.mark.asyncio
    async def test_threads_and_paging(self, client, signed_in, seed_recipe) -> None:
        """Should page top-level comments and attach replies."""
        user, headers = await signed_in()
        recipe_id = await seed_recipe(user.id)
        url = f"{API}/comments/recipe/{recipe_id}"
        ids = []
        for text in ("one", "two", "three"):
            created = await client.post(url, json={"content": text}, headers=headers)
            ids.append(created.json()["comment"]["id"])
        await client.post(
            url, json={"content": "reply", "parentId": ids[2]}, headers=headers
        )

        response = await client.get(url, params={"page": 1, "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["totalPages"] == 2
        assert body["currentPage"] == 1
        assert [c["content"] for c in body["comments"]] == ["three", "two"]
        assert body["comments"][0]["user"] == {"id": user.id, "name": "Ada"}
        assert [r["content"] for r in body["comments"][0]["replies"]] == ["reply"]

    @pytest.mark.asyncio
    async def test_empty_recipe(self, client) -> None:
        """Should return an empty page with zero pages."""
        response = await client.get(f"{API}/comments/recipe/5")

        assert response.json() == {"comments": [], "totalPages": 0, "currentPage": 1}

    @pytest.mark.asyncio
    async def test_limit_above_maximum(self, client) -> None:
        """Should reject oversized pages."""
        response = await client.get(
            f"{API}/comments/recipe/5", params={"limit": 101}
        )

        assert response.status_code == 400


class TestDeleteComment:
    """Tests for DELETE /comments/{id}."""

    @pytest.mark.asyncio
    async def test_author_deletes_with_replies(
        self, client, signed_in, seed_recipe, store
    ) -> None:
        """Should remove the comment and its replies."""
        user, headers = await signed_in()
        recipe_id = await seed_recipe(user.id)
        url = f"{API}/comments/recipe/{recipe_id}"
        top = (await client.post(url, json={"content": "a"}, headers=headers)).json()
        top_id = top["comment"]["id"]
        await client.post(
            url, json={"content": "b", "parentId": top_id}, headers=headers
        )

        response = await client.delete(f"{API}/comments/{top_id}", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Comment deleted successfully"}
        assert store.comments == {}

    @pytest.mark.asyncio
    async def test_admin_may_delete_any(self, client, signed_in, seed_recipe) -> None:
        """Should let admins moderate comments."""
        user, headers = await signed_in()
        _, admin_headers = await signed_in("Root", "root@example.com", "admin")
        recipe_id = await seed_recipe(user.id)
        top = await client.post(
            f"{API}/comments/recipe/{recipe_id}",
            json={"content": "a"},
            headers=headers,
        )

        response = await client.delete(
            f"{API}/comments/{top.json()['comment']['id']}", headers=admin_headers
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_other_user_forbidden(self, client, signed_in, seed_recipe) -> None:
        """Should stop users deleting other people's comments."""
        user, headers = await signed_in()
        _, other_headers = await signed_in("Grace", "grace@example.com")
        recipe_id = await seed_recipe(user.id)
        top = await client.post(
            f"{API}/comments/recipe/{recipe_id}",
            json={"content": "a"},
            headers=headers,
        )

        response = await client.delete(
            f"{API}/comments/{top.json()['comment']['id']}", headers=other_headers
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_missing(self, client, signed_in) -> None:
        """Should return 404 for an unknown comment."""
        _, headers = await signed_in()

        response = await client.delete(f"{API}/comments/999", headers=headers)

        assert response.status_code == 404
