from fastapi import status


class TestAuthorEndpoints:
    """Test author management endpoints."""

    def test_create_author_success(self, test_client):
        """Test successful author creation."""
        response = test_client.post(
            "/api/authors",
            json={"name": "Natsume Soseki", "birthDate": "1867-02-09"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Natsume Soseki"
        assert data["birthDate"] == "1867-02-09"
        assert isinstance(data["id"], int)
        assert "createdAt" in data
        assert "updatedAt" in data

    def test_create_author_accepts_snake_case(self, test_client):
        response = test_client.post(
            "/api/authors",
            json={"name": "Mori Ogai", "birth_date": "1862-02-17"},
        )
        assert response.status_code == status.HTTP_201_CREATED

    def test_create_author_trim_name(self, test_client):
        """Test that author name is trimmed."""
        response = test_client.post(
            "/api/authors",
            json={"name": "  Trimmed Name  ", "birthDate": "1950-01-01"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["name"] == "Trimmed Name"

    def test_create_author_empty_name(self, test_client):
        """Test creating author with empty name."""
        response = test_client.post(
            "/api/authors",
            json={"name": "   ", "birthDate": "1950-01-01"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert "name cannot be empty" in body["message"].lower()
        assert "name" in body["details"]["fields"]

    def test_create_author_future_birth_date(self, test_client):
        response = test_client.post(
            "/api/authors",
            json={"name": "Time Traveller", "birthDate": "2999-01-01"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert "birthDate" in response.json()["details"]["fields"]

    def test_create_author_missing_fields(self, test_client):
        response = test_client.post("/api/authors", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        fields = response.json()["details"]["fields"]
        assert set(fields) == {"name", "birthDate"}

    def test_create_author_duplicate_name(self, test_client, sample_author):
        response = test_client.post(
            "/api/authors",
            json={"name": sample_author["name"], "birthDate": "1990-01-01"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        body = response.json()
        assert body["code"] == "DUPLICATE_RESOURCE"
        assert set(body) == {"code", "message", "details", "timestamp"}

    def test_get_author(self, test_client, sample_author):
        response = test_client.get(f"/api/authors/{sample_author['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == sample_author["name"]
        assert response.json()["birthDate"] == sample_author["birthDate"]

    def test_get_author_not_found(self, test_client):
        response = test_client.get("/api/authors/999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["code"] == "RESOURCE_NOT_FOUND"

    def test_get_author_invalid_id(self, test_client):
        response = test_client.get("/api/authors/not-a-number")
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_authors_empty(self, test_client):
        response = test_client.get("/api/authors")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["content"] == []
        assert data["totalElements"] == 0
        assert data["totalPages"] == 0
        assert data["isEmpty"] is True
        assert data["pageSize"] == 20

    def test_list_authors_pagination(self, test_client):
        for i in range(3):
            test_client.post("/api/authors", json={"name": f"Author {i}", "birthDate": "1950-01-01"})

        response = test_client.get("/api/authors", params={"page": 1, "size": 2})

        data = response.json()
        assert [a["name"] for a in data["content"]] == ["Author 2"]
        assert data["pageNumber"] == 1
        assert data["totalPages"] == 2
        assert data["isFirst"] is False
        assert data["isLast"] is True

    def test_list_authors_name_filter(self, test_client):
        test_client.post("/api/authors", json={"name": "Haruki Murakami", "birthDate": "1949-01-12"})
        test_client.post("/api/authors", json={"name": "Banana Yoshimoto", "birthDate": "1964-07-24"})

        response = test_client.get("/api/authors", params={"name": "MURAKAMI"})

        data = response.json()
        assert [a["name"] for a in data["content"]] == ["Haruki Murakami"]
        assert data["totalElements"] == 1

    def test_list_authors_name_filter_wildcards(self, test_client):
        test_client.post("/api/authors", json={"name": "Alice", "birthDate": "1950-01-01"})
        test_client.post("/api/authors", json={"name": "Bob", "birthDate": "1950-01-01"})

        for term in ("_", "%"):
            response = test_client.get("/api/authors", params={"name": term})
            assert response.json()["totalElements"] == 0

    def test_list_authors_blank_name_lists_all(self, test_client, sample_author):
        response = test_client.get("/api/authors", params={"name": "  "})
        assert response.json()["totalElements"] == 1

    def test_list_authors_invalid_paging(self, test_client):
        response = test_client.get("/api/authors", params={"page": -1})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["code"] == "INVALID_ARGUMENT"

        response = test_client.get("/api/authors", params={"size": 0})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["code"] == "INVALID_ARGUMENT"

    def test_list_authors_large_page_size(self, test_client, sample_author):
        response = test_client.get("/api/authors", params={"page": 0, "size": 150})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["pageSize"] == 150
        assert data["totalElements"] == 1

    def test_update_author(self, test_client, sample_author):
        response = test_client.put(
            f"/api/authors/{sample_author['id']}",
            json={"name": "Renamed", "birthDate": "1971-06-06"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["name"] == "Renamed"
        assert data["birthDate"] == "1971-06-06"

    def test_update_author_not_found(self, test_client):
        response = test_client.put(
            "/api/authors/999", json={"name": "Nobody", "birthDate": "1971-06-06"}
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_author_name_collision(self, test_client, sample_author, second_author):
        response = test_client.put(
            f"/api/authors/{second_author['id']}",
            json={"name": sample_author["name"], "birthDate": "1980-01-15"},
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_delete_author(self, test_client, sample_author):
        response = test_client.delete(f"/api/authors/{sample_author['id']}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        assert test_client.get(f"/api/authors/{sample_author['id']}").status_code == 404

    def test_delete_author_not_found(self, test_client):
        response = test_client.delete("/api/authors/999")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_sole_author_of_book(self, test_client, sample_author, sample_book):
        response = test_client.delete(f"/api/authors/{sample_author['id']}")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["code"] == "INVALID_STATE"
        assert body["details"]["books"] == [sample_book["title"]]

    def test_author_exists(self, test_client, sample_author):
        response = test_client.get(f"/api/authors/{sample_author['id']}/exists")
        assert response.json() == {"exists": True}

        response = test_client.get("/api/authors/999/exists")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"exists": False}
