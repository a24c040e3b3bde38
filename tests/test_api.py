"""Tests for public API endpoints."""

from fastapi.testclient import TestClient

from grocery_nutrition.api.app import create_app
from grocery_nutrition.containers import AppContainer
from grocery_nutrition.domain.nutrition import NutritionalFacts
from tests.conftest import InMemoryProductRepository, make_product

VALID_PAYLOAD = {
    "userId": "user-1",
    "nutritionalData": {
        "calories": 450,
        "proteins": 11,
        "carbs": 60,
        "fats": 18,
        "fiber": 7,
        "saturatedFats": 3,
        "allergens": ["gluten"],
        "isVegan": True,
    },
}


def _client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def test_health(container: AppContainer) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_products_with_filters(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("yogurt", name="Yogurt"))
    product_repository.add(
        make_product(
            "tofu",
            name="Tofu",
            category="vegan",
            nutrition=NutritionalFacts(calories=140, proteins=15, is_vegan=True),
        )
    )

    response = _client(container).get(
        "/products", params={"is_vegan": "true", "exclude_allergens": ["milk"]}
    )

    assert response.status_code == 200
    products = response.json()["products"]
    assert [product["id"] for product in products] == ["tofu"]
    assert products[0]["has_nutritional_info"] is True


def test_list_products_rejects_bad_score(container: AppContainer) -> None:
    response = _client(container).get("/products", params={"min_score": 12})

    assert response.status_code == 422


def test_product_nutrition(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("yogurt"))

    response = _client(container).get(
        "/products/yogurt/nutrition", params={"portion_g": 200}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 5
    assert data["category"]["label"] == "Fair"
    assert data["daily_values"]["protein"] == 40


def test_product_nutrition_not_found(container: AppContainer) -> None:
    response = _client(container).get("/products/ghost/nutrition")

    assert response.status_code == 404


def test_similar_products(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("yogurt"))
    product_repository.add(make_product("kefir"))

    response = _client(container).get("/products/yogurt/similar")

    assert response.status_code == 200
    products = response.json()["products"]
    assert products[0]["id"] == "kefir"
    assert products[0]["similarity"] > 0.3


def test_compare_products(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("yogurt", brand="Dairyland"))
    product_repository.add(
        make_product(
            "dessert",
            brand="Sweetco",
            nutrition=NutritionalFacts(calories=180, proteins=3, sugar=22),
        )
    )

    response = _client(container).get(
        "/compare", params={"a": "yogurt", "b": "dessert"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["winner"] == "A"
    assert data["message"] == "Dairyland is nutritionally better"
    assert data["metrics"]["sugar"]["winner"] == "A"


def test_compare_missing_product_returns_error(container: AppContainer) -> None:
    response = _client(container).get("/compare", params={"a": "x", "b": "y"})

    assert response.status_code == 200
    assert response.json() == {"error": "Product not found: x"}


def test_submit_contribution(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("granola", category="cereals"))

    response = _client(container).post(
        "/products/granola/contributions", json=VALID_PAYLOAD
    )

    assert response.status_code == 201
    data = response.json()
    assert data["warnings"] == []
    assert data["contribution"]["status"] == "pending"
    assert data["contribution"]["nutritional_data"]["allergens"] == ["gluten"]
    assert data["contribution"]["nutritional_data"]["isVegan"] is True


def test_submit_invalid_contribution(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("granola", category="cereals"))
    payload = {"userId": "user-1", "nutritionalData": {"calories": 100}}

    response = _client(container).post(
        "/products/granola/contributions", json=payload
    )

    assert response.status_code == 422
    assert len(response.json()["detail"]["errors"]) == 3


def test_submit_contribution_negative_values(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("granola", category="cereals"))
    payload = {"userId": "user-1", "nutritionalData": {"calories": -5}}

    response = _client(container).post(
        "/products/granola/contributions", json=payload
    )

    assert response.status_code == 422


def test_submit_contribution_unknown_product(container: AppContainer) -> None:
    response = _client(container).post(
        "/products/ghost/contributions", json=VALID_PAYLOAD
    )

    assert response.status_code == 404


def test_provinces(container: AppContainer) -> None:
    client = _client(container)

    listing = client.get("/provinces")
    known = client.get("/provinces/AR-M")
    unknown = client.get("/provinces/AR-ZZ")

    assert len(listing.json()["provinces"]) == 24
    assert known.json() == {"code": "AR-M", "name": "Mendoza", "known": True}
    assert unknown.json() == {"code": "AR-ZZ", "name": "AR-ZZ", "known": False}


def test_add_and_list_reviews(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("yogurt"))
    client = _client(container)

    client.post("/products/yogurt/reviews", json={"userId": "user-1", "rating": 5})
    created = client.post(
        "/products/yogurt/reviews",
        json={"userId": "user-2", "username": "ana", "rating": 4, "comment": "Ok"},
    )
    listed = client.get("/products/yogurt/reviews")
    products = client.get("/products")

    assert created.status_code == 201
    assert created.json()["average_rating"] == 4.5
    assert created.json()["total_reviews"] == 2
    assert created.json()["review"]["username"] == "ana"
    assert [review["rating"] for review in listed.json()["reviews"]] == [4, 5]
    assert products.json()["products"][0]["average_rating"] == 4.5


def test_add_review_invalid_rating(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("yogurt"))

    response = _client(container).post(
        "/products/yogurt/reviews", json={"userId": "user-1", "rating": 9}
    )

    assert response.status_code == 422


def test_reviews_unknown_product(container: AppContainer) -> None:
    client = _client(container)

    assert client.get("/products/ghost/reviews").status_code == 404
    assert (
        client.post(
            "/products/ghost/reviews", json={"userId": "user-1", "rating": 3}
        ).status_code
        == 404
    )


def test_save_and_fetch_comparison(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("yogurt"))
    product_repository.add(
        make_product(
            "dessert", nutrition=NutritionalFacts(calories=180, proteins=3)
        )
    )
    client = _client(container)

    saved = client.post(
        "/comparisons",
        json={"userId": "user-1", "productIds": ["yogurt", "dessert"]},
    )
    comparison_id = saved.json()["comparison"]["id"]
    fetched = client.get(f"/comparisons/{comparison_id}")
    listed = client.get("/users/user-1/comparisons")

    assert saved.status_code == 201
    assert fetched.status_code == 200
    calories = fetched.json()["leaders"][0]
    assert calories["metric"] == "calories"
    assert calories["best"] == {"product_id": "yogurt", "value": 60}
    assert [item["id"] for item in listed.json()["comparisons"]] == [comparison_id]


def test_save_comparison_errors(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("yogurt"))
    client = _client(container)

    single = client.post(
        "/comparisons", json={"userId": "user-1", "productIds": ["yogurt"]}
    )
    unknown = client.post(
        "/comparisons", json={"userId": "user-1", "productIds": ["yogurt", "x"]}
    )

    assert single.status_code == 422
    assert unknown.status_code == 404
    assert client.get("/comparisons/missing").status_code == 404


def test_stats(
    container: AppContainer, product_repository: InMemoryProductRepository
) -> None:
    product_repository.add(make_product("yogurt"))
    product_repository.add(make_product("water", nutrition=None))

    response = _client(container).get("/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["total_products"] == 1
    assert data["total_contributions"] == 0
    assert data["total_reviews"] == 0
    assert data["last_updated"]
