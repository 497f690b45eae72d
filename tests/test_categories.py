"""Category service and endpoint tests."""

import pytest

from todo_api.exceptions import ValidationError
from todo_api.models import TodoCategory
from todo_api.services.category_service import CategoryService
from todo_api.services.todo_service import TodoService


def test_list_categories_sorted_by_name(db, make_category):
    """Test that categories come back in name order."""
    make_category("Work", "#0000FF")
    make_category("Errands", "#FF0000")
    make_category("Home", "#00FF00")

    names = [category.name for category in CategoryService(db).list_categories()]
    assert names == ["Errands", "Home", "Work"]


def test_create_category_trims_fields(db):
    """Test that name and color are stored trimmed."""
    category = CategoryService(db).create_category("  Home ", " #00FF00 ")
    assert category.id > 0
    assert category.name == "Home"
    assert category.color == "#00FF00"


@pytest.mark.parametrize(
    ("name", "color"),
    [("", "#fff"), ("   ", "#fff"), ("Home", ""), (None, "#fff"), ("Home", 7)],
)
def test_create_category_rejects_blank_fields(db, name, color):
    """Test that both fields must be non-empty strings."""
    with pytest.raises(ValidationError):
        CategoryService(db).create_category(name, color)


def test_delete_category_reports_existence(db, make_category):
    """Test that delete returns whether a row was removed."""
    category_id = make_category()
    service = CategoryService(db)

    assert service.delete_category(category_id) is True
    assert service.delete_category(category_id) is False
    assert service.list_categories() == []


def test_delete_category_keeps_todos(db, make_todo, make_category):
    """Test that deleting a category removes its links but not its todos."""
    todo_id = make_todo("Buy milk")
    category_id = make_category()
    db.add(TodoCategory(todo_id=todo_id, category_id=category_id))
    db.commit()

    CategoryService(db).delete_category(category_id)

    assert db.query(TodoCategory).count() == 0
    todo = TodoService(db).get_todo(todo_id)
    assert todo.title == "Buy milk"
    assert todo.categories == []


def test_categories_endpoints(client):
    """Test the category lifecycle over HTTP."""
    response = client.post("/api/categories", json={"name": "Work", "color": "#0000FF"})
    assert response.status_code == 201
    work = response.json()
    assert work["name"] == "Work"

    client.post("/api/categories", json={"name": "Home", "color": "#00FF00"})

    response = client.get("/api/categories")
    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Home", "Work"]

    response = client.delete(f"/api/categories/{work['id']}")
    assert response.status_code == 200
    assert response.json() == {"data": True}

    response = client.delete(f"/api/categories/{work['id']}")
    assert response.status_code == 200
    assert response.json() == {"data": False}


def test_create_category_endpoint_validation(client):
    """Test that missing or blank fields are 400s."""
    assert client.post("/api/categories", json={"name": "Home"}).status_code == 400
    assert client.post("/api/categories", json={"name": " ", "color": "#fff"}).status_code == 400


def test_deleted_category_disappears_from_todo(client):
    """Test that a todo no longer lists a deleted category."""
    todo_id = client.post("/api/todos", json={"title": "Buy milk"}).json()["id"]
    category_id = client.post(
        "/api/categories", json={"name": "Home", "color": "#00FF00"}
    ).json()["id"]
    client.post(f"/api/todos/{todo_id}/categories/{category_id}")

    client.delete(f"/api/categories/{category_id}")

    response = client.get(f"/api/todos/{todo_id}")
    assert response.status_code == 200
    assert response.json()["categories"] == []
